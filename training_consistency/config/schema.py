"""
Configuration Schema

Pydantic models for validating engine configuration.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

from training_consistency.config.defaults import (
    DEFAULT_FORMAT,
    MAX_FUTURE_DAYS,
    MAX_PAST_YEARS,
)

# Keys that may be persisted in the storage config table
STORED_KEYS = ("max_future_days", "max_past_years", "default_format")


class ConsistencyConfig(BaseModel):
    """Top-level configuration."""

    # Storage
    db_path: Optional[str] = None  # uses default if None

    # Request validation
    max_future_days: int = Field(default=MAX_FUTURE_DAYS, ge=0, le=31)
    max_past_years: int = Field(default=MAX_PAST_YEARS, ge=1, le=10)

    # Output
    default_format: Literal["text", "json"] = DEFAULT_FORMAT

    def get_db_path(self) -> Path:
        if self.db_path:
            return Path(self.db_path)
        from training_consistency.config.defaults import DEFAULT_DB_PATH
        return DEFAULT_DB_PATH

    @classmethod
    def from_storage(cls, storage, **overrides) -> "ConsistencyConfig":
        """Build a config from values stored via `set_config`.

        Explicit keyword overrides win over stored values.
        """
        values = {}
        for key in STORED_KEYS:
            value = storage.get_config(key)
            if value is not None:
                values[key] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
