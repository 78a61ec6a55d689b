import io
from collections.abc import Callable
from pathlib import Path

import pytest
import yaml
from src.core.common.logging_utils import configure_logging
from src.core.domain.command_context import ExecutionContext
from src.core.interfaces.repositories_interface import ISettingsRepository
from src.core.repositories.in_memory_settings_repository import (
    InMemorySettingsRepository,
)


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging() -> None:
    """Route stdlib and structlog records through the logging tree."""
    configure_logging("WARNING")


@pytest.fixture
def store() -> InMemorySettingsRepository:
    return InMemorySettingsRepository()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_context(
    store: InMemorySettingsRepository, output: io.StringIO
) -> Callable[..., ExecutionContext]:
    """Factory for execution contexts sharing the test store and sink."""

    def _make(
        verbosity: int = 0, repository: ISettingsRepository | None = None
    ) -> ExecutionContext:
        return ExecutionContext(
            store=repository or store, verbosity=verbosity, output=output
        )

    return _make


@pytest.fixture
def context(make_context: Callable[..., ExecutionContext]) -> ExecutionContext:
    return make_context()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove SETTINGS_* variables the developer's shell may have set."""
    for name in (
        "SETTINGS_STORE_BACKEND",
        "SETTINGS_STORE_PATH",
        "SETTINGS_VERBOSITY",
        "SETTINGS_LOG_LEVEL",
        "SETTINGS_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    """Create a minimal valid YAML config file and return its path."""
    cfg = {
        "verbosity": 3,
        "store": {"backend": "json", "path": str(tmp_path / "from-file.json")},
        "logging": {"level": "INFO"},
    }
    p = tmp_path / "settings.config.yaml"
    with p.open("w", encoding="utf-8") as f:
        yaml.safe_dump(cfg, f, sort_keys=False)
    return p
