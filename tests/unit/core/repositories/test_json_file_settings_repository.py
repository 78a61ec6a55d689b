import json
import os
from pathlib import Path

import pytest
from src.core.common.exceptions import ConfigurationError
from src.core.domain.store_result import MutationOutcome
from src.core.repositories.json_file_settings_repository import (
    JsonFileSettingsRepository,
)


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.json"


@pytest.fixture
def repository(settings_path: Path) -> JsonFileSettingsRepository:
    return JsonFileSettingsRepository(settings_path)


class TestJsonFileSettingsRepository:
    def test_missing_file_starts_empty(
        self, repository: JsonFileSettingsRepository, settings_path: Path
    ) -> None:
        assert list(repository.list_all()) == []
        assert not settings_path.exists()

    def test_set_persists_to_disk(
        self, repository: JsonFileSettingsRepository, settings_path: Path
    ) -> None:
        assert repository.set("greeting", "hello world")

        data = json.loads(settings_path.read_text(encoding="utf-8"))
        assert data == {"greeting": "hello world"}

    def test_values_survive_reopen(
        self, repository: JsonFileSettingsRepository, settings_path: Path
    ) -> None:
        repository.set("a", "1")
        repository.set("b", "two words")
        repository.delete("a")

        reopened = JsonFileSettingsRepository(settings_path)

        assert reopened.get(["a", "b"]) == {"b": "two words"}

    def test_delete_missing_key(self, repository: JsonFileSettingsRepository) -> None:
        result = repository.delete("missing")

        assert result.outcome is MutationOutcome.NOT_FOUND

    def test_failed_write_keeps_previous_value(
        self,
        repository: JsonFileSettingsRepository,
        settings_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A write that cannot be committed leaves the old value in effect."""
        repository.set("color", "red")

        def _fail(*args: object, **kwargs: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", _fail)
        result = repository.set("color", "blue")

        assert not result
        assert result.outcome is MutationOutcome.STORAGE_ERROR
        assert "disk full" in (result.detail or "")
        assert repository.get(["color"]) == {"color": "red"}
        assert json.loads(settings_path.read_text(encoding="utf-8")) == {
            "color": "red"
        }
        assert [p.name for p in settings_path.parent.iterdir()] == [
            settings_path.name
        ]

    def test_failed_delete_keeps_setting(
        self,
        repository: JsonFileSettingsRepository,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        repository.set("color", "red")

        def _fail(*args: object, **kwargs: object) -> None:
            raise OSError("read-only file system")

        monkeypatch.setattr(os, "replace", _fail)
        result = repository.delete("color")

        assert result.outcome is MutationOutcome.STORAGE_ERROR
        assert repository.get(["color"]) == {"color": "red"}

    def test_unencodable_write_leaves_no_temp_file(
        self,
        repository: JsonFileSettingsRepository,
        settings_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        repository.set("color", "red")

        def _fail(*args: object, **kwargs: object) -> None:
            raise UnicodeEncodeError(
                "utf-8", "\udcff", 0, 1, "surrogates not allowed"
            )

        monkeypatch.setattr(json, "dump", _fail)
        result = repository.set("color", "blue")

        assert result.outcome is MutationOutcome.STORAGE_ERROR
        assert repository.get(["color"]) == {"color": "red"}
        assert [p.name for p in settings_path.parent.iterdir()] == [
            settings_path.name
        ]

    def test_corrupt_file_raises_configuration_error(
        self, settings_path: Path
    ) -> None:
        settings_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            JsonFileSettingsRepository(settings_path)

        assert exc_info.value.details["path"] == str(settings_path)

    def test_non_object_file_is_rejected(self, settings_path: Path) -> None:
        settings_path.write_text("[1, 2, 3]", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            JsonFileSettingsRepository(settings_path)

    def test_loaded_values_are_strings(self, settings_path: Path) -> None:
        settings_path.write_text(
            json.dumps({"port": 8080, "empty": None, " ": "skipped"}),
            encoding="utf-8",
        )

        repository = JsonFileSettingsRepository(settings_path)

        assert repository.get(["port", "empty", " "]) == {"port": "8080", "empty": ""}
