"""Unit tests for SignedUrlConfig."""

import json

import pytest
from pydantic import ValidationError

from signed_url_store.config import SignedUrlConfig
from signed_url_store.enums import StorageBackend


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run each test in an empty directory without SIGNED_URL_ env vars."""
    monkeypatch.chdir(tmp_path)
    for key in [
        "SIGNED_URL_STORAGE_BACKEND",
        "SIGNED_URL_DATABASE_URL",
        "SIGNED_URL_LOCK_SHARDS",
        "SIGNED_URL_GC_INTERVAL_SECONDS",
        "SIGNED_URL_LOG_LEVEL",
        "SIGNED_URL_AUTO_CREATE_TABLES",
    ]:
        monkeypatch.delenv(key, raising=False)


class TestSignedUrlConfigDefaults:
    def test_defaults(self):
        config = SignedUrlConfig()

        assert config.storage_backend == StorageBackend.DATABASE
        assert config.database_url == "sqlite+aiosqlite:///./signed_urls.db"
        assert config.auto_create_tables is True
        assert config.lock_shards == 16
        assert config.gc_interval_seconds == 300
        assert config.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SIGNED_URL_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("SIGNED_URL_GC_INTERVAL_SECONDS", "5")

        config = SignedUrlConfig()

        assert config.storage_backend == StorageBackend.MEMORY
        assert config.gc_interval_seconds == 5

    @pytest.mark.parametrize("field", ["lock_shards", "gc_interval_seconds"])
    def test_rejects_values_below_one(self, field):
        with pytest.raises(ValidationError):
            SignedUrlConfig(**{field: 0})

    def test_rejects_unknown_backend(self):
        with pytest.raises(ValidationError):
            SignedUrlConfig(storage_backend="redis")


class TestFromJsonFile:
    def test_missing_files_use_defaults(self, tmp_path):
        config = SignedUrlConfig.from_json_file(
            str(tmp_path / "nope.json"), str(tmp_path / "nope.yml")
        )

        assert config.gc_interval_seconds == 300

    def test_json_values_are_loaded(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"storage_backend": "memory", "lock_shards": 4}))

        config = SignedUrlConfig.from_json_file(str(path), str(tmp_path / "config.yml"))

        assert config.storage_backend == StorageBackend.MEMORY
        assert config.lock_shards == 4

    def test_yaml_overrides_json(self, tmp_path):
        json_path = tmp_path / "config.json"
        json_path.write_text(json.dumps({"gc_interval_seconds": 10}))
        yaml_path = tmp_path / "config.yml"
        yaml_path.write_text("gc_interval_seconds: 20\n")

        config = SignedUrlConfig.from_json_file(str(json_path), str(yaml_path))

        assert config.gc_interval_seconds == 20

    def test_env_overrides_files(self, tmp_path, monkeypatch):
        json_path = tmp_path / "config.json"
        json_path.write_text(json.dumps({"gc_interval_seconds": 10}))
        monkeypatch.setenv("SIGNED_URL_GC_INTERVAL_SECONDS", "30")

        config = SignedUrlConfig.from_json_file(str(json_path), str(tmp_path / "config.yml"))

        assert config.gc_interval_seconds == 30

    def test_yaml_must_be_a_mapping(self, tmp_path):
        yaml_path = tmp_path / "config.yml"
        yaml_path.write_text("- a\n- b\n")

        with pytest.raises(ValueError):
            SignedUrlConfig.from_json_file(str(tmp_path / "config.json"), str(yaml_path))
