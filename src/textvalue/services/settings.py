"""Settings dataclass and JSON persistence for the textvalue command line tools."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Literal, Mapping

import jsonschema

__all__ = [
    "Settings",
    "SettingsStore",
    "SETTINGS_SCHEMA",
    "OUTPUT_FORMAT_CHOICES",
]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".textvalue"
_DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_ENV_OVERRIDES: Mapping[str, str] = {
    "TEXTVALUE_LOG_DIR": "log_dir",
    "TEXTVALUE_OUTPUT_FORMAT": "output_format",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "TEXTVALUE_DEBUG_LOGGING": "debug_logging",
    "TEXTVALUE_CONSOLE_LOGGING": "console_logging",
    "TEXTVALUE_TRACE_CORE": "trace_core",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
OUTPUT_FORMAT_CHOICES: tuple[str, ...] = ("text", "json")
OutputFormat = Literal["text", "json"]

SETTINGS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "version": {"type": "integer", "minimum": 1},
        "debug_logging": {"type": "boolean"},
        "console_logging": {"type": "boolean"},
        "trace_core": {"type": "boolean"},
        "log_dir": {"type": ["string", "null"]},
        "output_format": {"enum": list(OUTPUT_FORMAT_CHOICES)},
        "metadata": {"type": "object"},
    },
    "additionalProperties": True,
}


@dataclass(slots=True)
class Settings:
    """User-configurable settings for the ``textvalue`` command."""

    debug_logging: bool = False
    console_logging: bool = True
    trace_core: bool = False
    log_dir: str | None = None
    output_format: OutputFormat = "text"
    metadata: dict[str, Any] = field(default_factory=dict)


class SettingsStore:
    """Persistence adapter for :class:`Settings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Settings:
        """Load settings from disk, applying CLI then environment overrides."""

        payload = self._read_payload()
        settings = Settings()

        if payload and self._validate(payload):
            data = _filter_fields(payload)
            try:
                settings = Settings(**data)
            except TypeError as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = Settings()
            LOGGER.debug("Settings loaded from %s: %s", self._path, sorted(data))

        if overrides:
            settings = self._apply_overrides(settings, overrides, source="CLI")

        settings = self._apply_env_overrides(settings)
        if settings.output_format not in OUTPUT_FORMAT_CHOICES:
            LOGGER.warning(
                "Unknown output format %r; falling back to %r", settings.output_format, "text"
            )
            settings = replace(settings, output_format="text")
        return settings

    def save(self, settings: Settings) -> Path:
        """Persist settings to disk with atomic file writes."""

        payload = asdict(settings)
        payload["version"] = _SETTINGS_VERSION
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            payload = json.loads(text)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not hold a JSON object", self._path)
            return {}
        return payload

    def _validate(self, payload: Mapping[str, Any]) -> bool:
        validator = jsonschema.Draft202012Validator(SETTINGS_SCHEMA)
        issues = sorted(validator.iter_errors(payload), key=lambda issue: list(issue.absolute_path))
        for issue in issues:
            path = ".".join(str(part) for part in issue.absolute_path)
            LOGGER.warning("Settings file %s is invalid at %s: %s", self._path, path or "<root>", issue.message)
        return not issues

    def _apply_overrides(
        self,
        settings: Settings,
        overrides: Mapping[str, Any],
        *,
        source: str = "runtime",
    ) -> Settings:
        allowed = {item.name: item for item in fields(Settings)}
        filtered: Dict[str, Any] = {}
        for key, value in overrides.items():
            known = allowed.get(key)
            if known is None:
                continue
            # ``None`` clears nullable fields and is ignored everywhere else.
            if value is None and known.default is not None:
                continue
            filtered[key] = value
        metadata_override = filtered.get("metadata")
        if isinstance(metadata_override, Mapping):
            merged_metadata = dict(settings.metadata or {})
            merged_metadata.update(metadata_override)
            filtered["metadata"] = merged_metadata
        if filtered:
            LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
            settings = replace(settings, **filtered)
        return settings

    def _apply_env_overrides(self, settings: Settings) -> Settings:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value.strip().lower() in _TRUE_VALUES
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="environment")
        return settings


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {item.name for item in fields(Settings)}
    return {key: value for key, value in payload.items() if key in allowed}
