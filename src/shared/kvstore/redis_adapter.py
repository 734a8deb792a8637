"""Redis KV store: shares storefront state through a Redis server."""

import redis

from shared.kvstore.port import KVStore


class RedisKVStore(KVStore):
    def __init__(self, client):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisKVStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> str | None:
        value = self.client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self.client.set(key, value)

    def remove(self, key: str) -> None:
        self.client.delete(key)
