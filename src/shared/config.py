"""Runtime configuration for the storefront.

Values come from ``STOREFRONT_*`` environment variables, optionally loaded
from a ``.env`` file. Every field has a default suitable for local use.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "STOREFRONT_"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    env: str = "development"
    kv_adapter: str = "memory"  # memory | file | redis
    kv_path: Path = Path("storefront-data.json")
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "uzum"
    country_code: str = Field(default="998", pattern=r"^\d{1,3}$")
    discount_rate: float = Field(default=0.1, ge=0, le=1)
    delivery_window_days: int = Field(default=3, ge=0)
    order_latency_seconds: float = Field(default=0.0, ge=0)
    log_level: str = "INFO"
    log_format: str = "console"  # console | json

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from the process environment (or an explicit mapping)."""
        if environ is None:
            load_dotenv()
            environ = os.environ

        values = {}
        for name in cls.model_fields:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in environ:
                values[name] = environ[key]
        return cls(**values)

    def storage_key(self, collection: str) -> str:
        return f"{self.key_prefix}-{collection}"
