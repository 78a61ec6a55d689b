from pathlib import Path

import pytest
import yaml
from src.core.common.exceptions import ConfigurationError
from src.core.config.app_config import (
    AppConfig,
    LogLevel,
    StoreBackend,
    StoreConfig,
    load_config,
)
from src.core.config.parameter_resolution import ParameterResolution, ParameterSource


@pytest.mark.usefixtures("clean_env")
class TestLoadConfig:
    def test_defaults(self) -> None:
        cfg = load_config(environ={})

        assert cfg.verbosity == 0
        assert cfg.store.backend is StoreBackend.SQLITE
        assert cfg.store.path == "settings.db"
        assert cfg.logging.level is LogLevel.WARNING
        assert cfg.logging.log_file is None

    def test_yaml_file(self, temp_config_path: Path, tmp_path: Path) -> None:
        cfg = load_config(temp_config_path, environ={})

        assert cfg.verbosity == 3
        assert cfg.store.backend is StoreBackend.JSON
        assert cfg.store.path == str(tmp_path / "from-file.json")
        assert cfg.logging.level is LogLevel.INFO

    def test_environment_overrides_file(self, temp_config_path: Path) -> None:
        cfg = load_config(
            temp_config_path,
            environ={
                "SETTINGS_STORE_BACKEND": "MEMORY",
                "SETTINGS_VERBOSITY": "12",
                "SETTINGS_LOG_LEVEL": "debug",
            },
        )

        assert cfg.store.backend is StoreBackend.MEMORY
        assert cfg.verbosity == 12
        assert cfg.logging.level is LogLevel.DEBUG

    def test_overrides_win(self, temp_config_path: Path) -> None:
        resolution = ParameterResolution()

        cfg = load_config(
            temp_config_path,
            resolution=resolution,
            environ={"SETTINGS_VERBOSITY": "12"},
            overrides={"verbosity": 1, "store.path": None},
        )

        assert cfg.verbosity == 1
        assert resolution.source_of("verbosity") is ParameterSource.CLI
        assert resolution.source_of("store.path") is ParameterSource.CONFIG_FILE
        assert resolution.source_of("logging.format") is ParameterSource.DEFAULT

    def test_non_integer_verbosity_env_is_ignored(self) -> None:
        cfg = load_config(environ={"SETTINGS_VERBOSITY": "loud"})

        assert cfg.verbosity == 0

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        cfg = load_config(tmp_path / "absent.yaml", environ={})

        assert cfg == AppConfig()

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text("verbosity = 1\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path, environ={})

    def test_schema_violation(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(
            yaml.safe_dump({"store": {"backend": "redis"}, "colour": "blue"}),
            encoding="utf-8",
        )

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path, environ={})

        errors = exc_info.value.details["errors"]
        assert len(errors) == 2
        assert any("redis" in e for e in errors)

    def test_invalid_yaml_syntax(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("store: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path, environ={})

        assert exc_info.value.message == "Invalid YAML syntax"

    def test_invalid_override(self) -> None:
        with pytest.raises(ConfigurationError):
            load_config(environ={}, overrides={"verbosity": -1})


class TestStoreConfig:
    def test_json_default_path(self) -> None:
        assert StoreConfig(backend="json").path == "settings.json"

    def test_memory_has_no_path(self) -> None:
        assert StoreConfig(backend=" Memory ").path is None

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError):
            StoreConfig(backend="redis")


def test_extra_fields_forbidden() -> None:
    with pytest.raises(ValueError):
        AppConfig.model_validate({"colour": "blue"})
