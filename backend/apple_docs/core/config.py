"""Application configuration handling."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Mapping

import yaml
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "ADOCS_"
DEFAULT_CONFIG_PATH = Path("~/.config/apple-docs/config.yaml")

_YAML_KEY_MAP: Mapping[tuple[str, ...], str] = {
    ("storage", "db_path"): "db_path",
    ("embeddings", "backend"): "embedding_backend",
    ("embeddings", "model"): "embedding_model",
    ("embeddings", "dimensions"): "embedding_dimensions",
    ("embeddings", "api_key"): "openai_api_key",
    ("embeddings", "request_timeout"): "embedding_request_timeout",
    ("search", "limit"): "default_limit",
    ("search", "min_similarity"): "default_min_similarity",
    ("search", "compatibility_cache_size"): "compatibility_cache_size",
    ("timeouts", "init"): "init_timeout",
    ("timeouts", "search"): "search_timeout",
    ("timeouts", "related"): "related_timeout",
    ("timeouts", "code"): "code_timeout",
    ("timeouts", "stats"): "stats_timeout",
    ("timeouts", "document"): "document_timeout",
}

# Unprefixed variables understood for compatibility with existing deployments.
_ENV_ALIASES: Mapping[str, str] = {
    "OPENAI_API_KEY": "openai_api_key",
    "EMBEDDINGS_DB_PATH": "db_path",
    "EMBEDDING_MODEL": "embedding_model",
    "EMBEDDING_DIMENSIONS": "embedding_dimensions",
}


class Settings(BaseModel):
    """Runtime configuration loaded from YAML file and environment variables."""

    db_path: Path = Field(default=Path("embeddings.db"))
    embedding_backend: Literal["openai", "hashed"] = "openai"
    embedding_model: str = "text-embedding-3-large"
    embedding_dimensions: int = Field(default=3072, ge=1)
    openai_api_key: str | None = None
    embedding_request_timeout: float = 30.0
    default_limit: int = Field(default=10, ge=1, le=100)
    default_min_similarity: float = 0.3
    compatibility_cache_size: int = Field(default=1000, ge=1)
    init_timeout: float = 30.0
    search_timeout: float = 30.0
    related_timeout: float = 15.0
    code_timeout: float = 15.0
    stats_timeout: float = 10.0
    document_timeout: float = 30.0

    model_config = {
        "validate_assignment": True,
        "extra": "ignore",
    }

    @field_validator("db_path", mode="before")
    @classmethod
    def _expand_db_path(cls, value: Any) -> Path:
        if isinstance(value, Path):
            return value.expanduser()
        if isinstance(value, str):
            return Path(value).expanduser()
        raise TypeError("db_path must be a path or string")

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> "Settings":
        """Load YAML config and overlay env vars; fall back to defaults."""
        config_path = cls._resolve_config_path(path)
        data: dict[str, Any] = {}
        if config_path and config_path.exists():
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
            data.update(_flatten_yaml(raw))
        data.update(_load_env_overrides())
        return cls(**data)

    @staticmethod
    def _resolve_config_path(path: Path | None) -> Path | None:
        if path is not None:
            return path.expanduser()
        env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
        if env_path:
            return Path(env_path).expanduser()
        resolved_default = DEFAULT_CONFIG_PATH.expanduser()
        return resolved_default if resolved_default.exists() else None


def _flatten_yaml(raw: Mapping[str, Any], prefix: tuple[str, ...] = ()) -> dict[str, Any]:
    """Flatten nested YAML configuration to Settings field names."""
    flat: dict[str, Any] = {}
    for key, value in raw.items():
        next_prefix = prefix + (key,)
        if isinstance(value, Mapping):
            flat.update(_flatten_yaml(value, prefix=next_prefix))
        else:
            mapped_key = _YAML_KEY_MAP.get(next_prefix)
            if mapped_key:
                flat[mapped_key] = value
            elif key in Settings.model_fields:
                flat[key] = value
    return flat


def _load_env_overrides() -> dict[str, Any]:
    """Map ADOCS_ variables (and the legacy aliases) into Settings fields."""
    overrides: dict[str, Any] = {}
    for key, field_name in _ENV_ALIASES.items():
        value = os.environ.get(key)
        if value:
            overrides[field_name] = value
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in Settings.model_fields:
            overrides[field_name] = value
    return overrides


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings accessor for dependency injection."""
    return Settings.from_yaml()


__all__ = ["Settings", "get_settings"]
