"""Tests for configuration loading and the context override mechanism."""

from pathlib import Path

import pytest

from src.bookstore.runtime.config.config_data import ConfigData, DatabaseConfig, StorageConfig
from src.bookstore.runtime.config.config_template import (
    load_templated_yaml,
    substitute_env_vars,
)
from src.bookstore.runtime.context import get_config, with_context

_YAML = """
config:
  app:
    environment: test
    port: ${BOOKSTORE_TEST_PORT:-9000}
    jwt_signing_secret: ${BOOKSTORE_TEST_SECRET}
  storage:
    images_dir: /var/lib/bookstore/images
"""


class TestSubstitution:
    def test_default_used_when_unset(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("BOOKSTORE_TEST_UNSET", raising=False)
        assert substitute_env_vars("x=${BOOKSTORE_TEST_UNSET:-fallback}") == "x=fallback"

    def test_environment_value_wins(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BOOKSTORE_TEST_SET", "value")
        assert substitute_env_vars("${BOOKSTORE_TEST_SET:-fallback}") == "value"

    def test_required_variable_missing(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("BOOKSTORE_TEST_REQUIRED", raising=False)
        with pytest.raises(ValueError):
            substitute_env_vars("${BOOKSTORE_TEST_REQUIRED}")

    def test_required_variable_custom_message(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("BOOKSTORE_TEST_REQUIRED", raising=False)
        with pytest.raises(ValueError, match="set me"):
            substitute_env_vars("${BOOKSTORE_TEST_REQUIRED:?set me}")


class TestLoadTemplatedYaml:
    def test_missing_file_yields_defaults(self, tmp_path: Path):
        config = load_templated_yaml(tmp_path / "absent.yaml")
        assert config == ConfigData()

    def test_loads_config_section(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BOOKSTORE_TEST_SECRET", "s3cret")
        monkeypatch.delenv("BOOKSTORE_TEST_PORT", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(_YAML)

        config = load_templated_yaml(path)

        assert config.app.environment == "test"
        assert config.app.port == 9000
        assert config.app.jwt_signing_secret == "s3cret"
        assert config.storage.images_dir == "/var/lib/bookstore/images"
        # untouched sections keep their defaults
        assert config.database.url == DatabaseConfig().url

    def test_environment_prefixed_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("APP_ENVIRONMENT", "staging")
        monkeypatch.setenv("BOOKSTORE_TEST_SECRET", "base")
        monkeypatch.setenv("STAGING_BOOKSTORE_TEST_SECRET", "staging-secret")
        path = tmp_path / "config.yaml"
        path.write_text(_YAML)

        config = load_templated_yaml(path)

        assert config.app.jwt_signing_secret == "staging-secret"

    def test_invalid_config_raises(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  app:\n    port: not-a-number\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)


class TestDatabaseConfig:
    def test_sqlite_connection_string_is_url(self):
        config = DatabaseConfig(url="sqlite:///./books.db")
        assert config.is_sqlite
        assert config.connection_string == "sqlite:///./books.db"

    def test_password_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BOOKSTORE_DB_PASSWORD", "pw")
        config = DatabaseConfig(
            url="postgresql://books@db:5432/books",
            password_env_var="BOOKSTORE_DB_PASSWORD",
        )
        assert config.connection_string == "postgresql://books:pw@db:5432/books"

    def test_password_from_file(self, tmp_path: Path):
        secret = tmp_path / "db_password"
        secret.write_text("filepw\n")
        config = DatabaseConfig(
            url="postgresql://books@db:5432/books", password_file=str(secret)
        )
        assert config.password == "filepw"


class TestWithContext:
    def test_override_is_scoped(self):
        before = get_config().storage.images_dir
        database_url = get_config().database.url
        override = ConfigData(storage=StorageConfig(images_dir="/tmp/override"))

        with with_context(override):
            assert get_config().storage.images_dir == "/tmp/override"
            # fields not set on the override are inherited
            assert get_config().database.url == database_url

        assert get_config().storage.images_dir == before

    def test_rejects_non_config(self):
        with pytest.raises(ValueError):
            with with_context({"storage": {}}):
                pass
