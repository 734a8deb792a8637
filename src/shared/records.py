"""Serialization of record collections to and from the KV store.

Each collection is stored as one JSON document under its own key. Reading is
schema-checked and fails closed: anything that does not decode into the
expected records is logged and treated as absent.
"""

import pydantic
import structlog
from pydantic import TypeAdapter

from shared.kvstore.port import KVStore

logger = structlog.get_logger(__name__)


def load_collection(store: KVStore, key: str, adapter: TypeAdapter) -> list:
    """Load the list stored under ``key``; empty when missing or malformed."""
    value = load_record(store, key, adapter)
    return list(value) if value is not None else []


def save_collection(store: KVStore, key: str, adapter: TypeAdapter, items) -> None:
    store.set(key, adapter.dump_json(list(items)).decode("utf-8"))


def load_record(store: KVStore, key: str, adapter: TypeAdapter):
    """Load a single record stored under ``key``; None when missing or malformed."""
    raw = store.get(key)
    if raw is None:
        return None

    try:
        return adapter.validate_json(raw)
    except pydantic.ValidationError as exc:
        logger.warning(
            "Discarding malformed stored data",
            key=key,
            error_count=exc.error_count(),
        )
        return None


def save_record(store: KVStore, key: str, adapter: TypeAdapter, record) -> None:
    store.set(key, adapter.dump_json(record).decode("utf-8"))
