"""Tests for configuration loading."""

from pathlib import Path

import pytest

from apple_docs.core.config import Settings


def test_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ADOCS_DB_PATH", raising=False)
    settings = Settings.from_yaml(tmp_path / "absent.yaml")
    assert settings.db_path == Path("embeddings.db")
    assert settings.embedding_model == "text-embedding-3-large"
    assert settings.embedding_dimensions == 3072
    assert settings.default_min_similarity == 0.3
    assert settings.related_timeout == 15.0


def test_yaml_sections_map_to_fields(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ADOCS_DB_PATH", raising=False)
    config = tmp_path / "config.yaml"
    config.write_text(
        "storage:\n"
        "  db_path: /data/docs.db\n"
        "embeddings:\n"
        "  backend: hashed\n"
        "  dimensions: 256\n"
        "timeouts:\n"
        "  search: 5\n"
    )
    settings = Settings.from_yaml(config)
    assert settings.db_path == Path("/data/docs.db")
    assert settings.embedding_backend == "hashed"
    assert settings.embedding_dimensions == 256
    assert settings.search_timeout == 5.0


def test_environment_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("search:\n  limit: 5\n")
    monkeypatch.setenv("ADOCS_DEFAULT_LIMIT", "20")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("EMBEDDING_DIMENSIONS", "1536")
    settings = Settings.from_yaml(config)
    assert settings.default_limit == 20
    assert settings.openai_api_key == "sk-env"
    assert settings.embedding_dimensions == 1536


def test_prefixed_variable_beats_legacy_alias(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EMBEDDINGS_DB_PATH", "/legacy.db")
    monkeypatch.setenv("ADOCS_DB_PATH", "/preferred.db")
    assert Settings.from_yaml(tmp_path / "absent.yaml").db_path == Path("/preferred.db")
