"""
Unit tests for configuration loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from extractly.config import DEFAULT_SECRET_KEY, Config, find_config_file, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("EXTRACTLY_ENVIRONMENT", "EXTRACTLY_AUTH__SECRET_KEY", "EXTRACTLY_AUTH__BYPASS"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestDefaults:
    def test_defaults(self):
        config = Config()

        assert config.environment == "production"
        assert config.auth.secret_key == DEFAULT_SECRET_KEY
        assert config.auth.algorithm == "HS256"
        assert config.auth.default_expires_in == "7d"
        assert config.fetcher.timeout == 30.0
        assert config.fetcher.max_redirects == 5
        assert "Mozilla/5.0" in config.fetcher.user_agent
        assert config.web.port == 3000
        assert config.web.cors_origins == []
        assert config.monitoring.log_file is None

    @pytest.mark.parametrize(
        ("environment", "bypass", "expected"),
        [
            ("production", False, False),
            ("test", False, False),
            ("development", False, True),
            ("production", True, True),
        ],
    )
    def test_auth_bypassed(self, environment, bypass, expected):
        config = Config(environment=environment, auth={"bypass": bypass})
        assert config.auth_bypassed is expected

    def test_rejects_unknown_environment(self):
        with pytest.raises(ValidationError):
            Config(environment="staging")

    def test_rejects_empty_secret(self):
        with pytest.raises(ValidationError):
            Config(auth={"secret_key": ""})

    def test_cors_origins_from_comma_list(self):
        config = Config(web={"cors_origins": "https://a.example, https://b.example,"})
        assert config.web.cors_origins == ["https://a.example", "https://b.example"]


@pytest.mark.unit
class TestEnvironment:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("EXTRACTLY_ENVIRONMENT", "development")
        monkeypatch.setenv("EXTRACTLY_AUTH__SECRET_KEY", "from-env")
        monkeypatch.setenv("EXTRACTLY_FETCHER__TIMEOUT", "12.5")

        config = Config()

        assert config.environment == "development"
        assert config.auth.secret_key == "from-env"
        assert config.fetcher.timeout == 12.5


@pytest.mark.unit
class TestYaml:
    def test_from_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "environment: test\n"
            "auth:\n"
            "  secret_key: yaml-secret\n"
            "  default_expires_in: 12h\n"
            "web:\n"
            "  port: 8080\n"
            "  cors_origins:\n"
            "    - https://reader.example\n",
            encoding="utf-8",
        )

        config = Config.from_yaml(path)

        assert config.environment == "test"
        assert config.auth.secret_key == "yaml-secret"
        assert config.auth.default_expires_in == "12h"
        assert config.web.port == 8080
        assert config.web.cors_origins == ["https://reader.example"]

    def test_empty_yaml_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert Config.from_yaml(path).web.port == 3000

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "absent.yaml")

    def test_find_and_load_from_working_directory(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert find_config_file() is None
        assert load_config().environment == "production"

        (tmp_path / "config.yml").write_text("environment: test\n", encoding="utf-8")

        assert find_config_file() == tmp_path / "config.yml"
        assert load_config().environment == "test"

    def test_log_file_parent_is_created(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "nested" / "extractly.log"
        config = Config(monitoring={"log_file": str(log_file)})

        assert config.monitoring.log_file == str(log_file)
        assert log_file.parent.is_dir()


@pytest.mark.unit
class TestDotEnv:
    def test_dotenv_in_working_directory(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text(
            "EXTRACTLY_AUTH__SECRET_KEY=from-dotenv\n"
            "EXTRACTLY_ENVIRONMENT=test\n"
            "UNRELATED_SETTING=ignored\n",
            encoding="utf-8",
        )

        config = Config()

        assert config.auth.secret_key == "from-dotenv"
        assert config.environment == "test"

    def test_process_environment_wins_over_dotenv(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("EXTRACTLY_AUTH__SECRET_KEY=from-dotenv\n", encoding="utf-8")
        monkeypatch.setenv("EXTRACTLY_AUTH__SECRET_KEY", "from-env")

        assert Config().auth.secret_key == "from-env"

    def test_dotenv_fills_in_what_yaml_leaves_unset(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("EXTRACTLY_AUTH__SECRET_KEY=from-dotenv\n", encoding="utf-8")
        (tmp_path / "config.yaml").write_text("environment: test\nweb:\n  port: 8080\n", encoding="utf-8")

        config = load_config()

        assert config.environment == "test"
        assert config.web.port == 8080
        assert config.auth.secret_key == "from-dotenv"
