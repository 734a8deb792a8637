"""Pluggable flat key/value persistence."""

from shared.config import Settings
from shared.kvstore.port import KVStore


def create_store(settings: Settings) -> KVStore:
    """Build the KV store adapter named by ``settings.kv_adapter``.

    Uses the in-memory store by default. ``file`` persists to
    ``settings.kv_path`` and ``redis`` connects to ``settings.redis_url``.
    """
    adapter = settings.kv_adapter
    if adapter == "memory":
        from shared.kvstore.memory_adapter import InMemoryKVStore

        return InMemoryKVStore()
    if adapter == "file":
        from shared.kvstore.file_adapter import JsonFileKVStore

        return JsonFileKVStore(settings.kv_path)
    if adapter == "redis":
        from shared.kvstore.redis_adapter import RedisKVStore

        return RedisKVStore.from_url(settings.redis_url)
    raise ValueError(f"Unknown KV store adapter: {adapter}")
