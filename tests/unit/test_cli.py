"""Tests for the developer CLI."""

from typer.testing import CliRunner

from src.bookstore.core.services import JwtVerificationService
from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.context import get_config, with_context
from src.dev.cli import app

runner = CliRunner()


class TestTokenCommand:
    def test_prints_verifiable_token(self, test_config: ConfigData):
        with with_context(test_config):
            result = runner.invoke(
                app, ["token", "--subject", "alice", "--role", "Administrator", "--role", "Editor"]
            )
            assert result.exit_code == 0, result.output

            token = result.output.strip().splitlines()[-1]
            claims = JwtVerificationService(get_config()).verify_jwt(token)

        assert claims.subject == "alice"
        assert claims.roles == ["Administrator", "Editor"]

    def test_fails_without_secret(self, test_config: ConfigData):
        config = test_config.model_copy(deep=True)
        config.app.jwt_signing_secret = None

        with with_context(config):
            result = runner.invoke(app, ["token", "--subject", "alice"])

        assert result.exit_code == 1


class TestInitDbCommand:
    def test_creates_tables(self, test_config: ConfigData, tmp_path):
        config = test_config.model_copy(deep=True)
        db_path = tmp_path / "cli.db"
        config.database.url = f"sqlite:///{db_path}"

        with with_context(config):
            result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0, result.output
        assert db_path.exists()
