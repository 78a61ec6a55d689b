from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError

from src.core.common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).with_name("schemas") / "settings_console.schema.yaml"


def load_yaml_file(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        location = f" at line {mark.line + 1}, column {mark.column + 1}" if mark else ""
        msg = f"YAML syntax error in {path}{location}: {getattr(e, 'problem', str(e))}"
        raise ConfigurationError(
            message="Invalid YAML syntax", details={"path": str(path), "hint": msg}
        ) from e
    except FileNotFoundError as e:
        raise ConfigurationError(
            message="YAML file not found", details={"path": str(path)}
        ) from e


def _load_yaml_schema(schema_path: Path) -> dict[str, Any]:
    schema_data = load_yaml_file(schema_path)
    if not isinstance(schema_data, dict):
        raise ConfigurationError(
            message="Invalid YAML schema format",
            details={"path": str(schema_path), "hint": "Top-level must be a mapping"},
        )
    return schema_data


def validate_config_data(
    instance: Any, source: Path, schema_path: Path | None = None
) -> None:
    """Validate already-loaded YAML data against a YAML-expressed JSON Schema.

    Raises:
        ConfigurationError: With one formatted message per schema violation
    """
    schema = _load_yaml_schema(schema_path or DEFAULT_SCHEMA_PATH)

    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
    if not errors:
        logger.debug("Validated YAML config: %s", source)
        return

    def _format_error(err: ValidationError) -> str:
        path_str = "/".join([str(p) for p in err.path]) if err.path else "<root>"
        return f"{source}: {err.message} (at {path_str})"

    messages = [_format_error(e) for e in errors]
    raise ConfigurationError(
        message="YAML schema validation failed",
        details={"path": str(source), "errors": messages},
    )
