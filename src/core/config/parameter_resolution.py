"""Utilities for tracking configuration parameter origins and logging them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.core.common.logging_utils import is_sensitive_key, redact


class ParameterSource(Enum):
    """Enumeration of configuration sources ordered by precedence."""

    DEFAULT = "default"
    CONFIG_FILE = "config"
    ENVIRONMENT = "environment"
    CLI = "cli"


@dataclass
class ResolvedParameter:
    """The value a configuration parameter ended up with, and who supplied it."""

    name: str
    value: Any
    source: ParameterSource
    origin: str | None = None


class ParameterResolution:
    """Track configuration values and the source that supplied them."""

    def __init__(self) -> None:
        self._latest: dict[str, ResolvedParameter] = {}

    def record(
        self,
        name: str,
        value: Any,
        source: ParameterSource,
        *,
        origin: str | None = None,
    ) -> None:
        """Record that a dotted parameter path was set by ``source``."""
        self._latest[name] = ResolvedParameter(name, value, source, origin)

    def source_of(self, name: str) -> ParameterSource:
        entry = self._latest.get(name)
        return entry.source if entry else ParameterSource.DEFAULT

    def build_report(self, config: Any) -> list[ResolvedParameter]:
        """Describe every leaf of ``config`` with the source that set it."""
        report: list[ResolvedParameter] = []
        for name, value in flatten(config.model_dump(mode="json")).items():
            entry = self._latest.get(name)
            report.append(
                ResolvedParameter(
                    name,
                    value,
                    entry.source if entry else ParameterSource.DEFAULT,
                    entry.origin if entry else None,
                )
            )
        return sorted(report, key=lambda r: r.name)

    def log(self, logger: logging.Logger, config: Any) -> None:
        """Emit one DEBUG record per resolved configuration value."""
        for entry in self.build_report(config):
            value = entry.value
            if isinstance(value, str) and is_sensitive_key(entry.name):
                value = redact(value)
            origin_suffix = f" {entry.origin}" if entry.origin else ""
            logger.debug(
                "Loaded parameter %s = %r (%s%s)",
                entry.name,
                value,
                entry.source.value,
                origin_suffix,
            )


def flatten(data: dict[str, Any]) -> dict[str, Any]:
    """Convert a nested mapping into a flat dict of dotted paths."""
    flattened: dict[str, Any] = {}

    def _walk(value: Any, prefix: str) -> None:
        if isinstance(value, dict):
            for key, child in value.items():
                _walk(child, f"{prefix}.{key}" if prefix else key)
        else:
            flattened[prefix] = value

    _walk(data, "")
    return flattened


__all__ = [
    "ParameterResolution",
    "ParameterSource",
    "ResolvedParameter",
    "flatten",
]
