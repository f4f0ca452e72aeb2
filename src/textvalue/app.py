"""Command line entry point exposing :class:`TextValue` operations."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, TextIO, get_args, get_origin, get_type_hints

from .core import TextValue, TextValueError
from .services.settings import OUTPUT_FORMAT_CHOICES, Settings, SettingsStore
from .utils import logging as logging_utils

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}
_LOGGER = logging.getLogger(__name__)
EXIT_USAGE = 2

CommandHandler = Callable[[TextValue, argparse.Namespace], Any]


def configure_logging(settings: Settings, *, force: bool = False) -> Path:
    """Configure logging from the effective settings."""

    level = logging.DEBUG if settings.debug_logging else logging.INFO
    log_path = logging_utils.setup_logging(
        level,
        log_dir=settings.log_dir,
        console=settings.console_logging,
        trace_core=settings.trace_core,
        force=force,
    )
    _LOGGER.debug("Logging configured (level=%s, path=%s)", logging.getLevelName(level), log_path)
    return log_path


def load_settings(
    path: Optional[Path] = None,
    *,
    store: SettingsStore | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        return active_store.load(overrides=overrides)
    except OSError as exc:
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        return Settings()


def main(argv: Sequence[str] | None = None, *, stdout: TextIO | None = None, stderr: TextIO | None = None) -> int:
    """Entry point invoked by the ``textvalue`` console script."""

    out = stdout or sys.stdout
    err = stderr or sys.stderr
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings_path = args.settings_path or os.environ.get("TEXTVALUE_SETTINGS_PATH")
    resolved_path = Path(settings_path).expanduser() if settings_path else None
    store = SettingsStore(resolved_path)
    try:
        overrides = _coerce_cli_overrides(args.overrides or [])
    except ValueError as exc:
        print(f"Invalid --set override: {exc}", file=err)
        return EXIT_USAGE
    if args.output_format:
        overrides["output_format"] = args.output_format

    settings = load_settings(resolved_path, store=store, overrides=overrides or None)
    configure_logging(settings, force=True)

    if args.dump_settings:
        payload = asdict(settings)
        payload["settings_path"] = str(store.path)
        print(json.dumps(payload, indent=2, sort_keys=True), file=out)
        return 0

    if args.command is None:
        parser.print_usage(err)
        return EXIT_USAGE

    handler: CommandHandler = args.handler
    try:
        source = TextValue.from_text(args.source)
        result = handler(source, args)
    except TextValueError as exc:
        _LOGGER.debug("Command %s rejected: %s", args.command, exc)
        _report_error(exc, settings.output_format, err)
        return EXIT_USAGE

    _emit(args.command, result, settings.output_format, out)
    return 0


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------
def _cmd_contains(source: TextValue, args: argparse.Namespace) -> bool:
    return source.contains(args.token)


def _cmd_starts_with(source: TextValue, args: argparse.Namespace) -> bool:
    return source.starts_with(args.token)


def _cmd_index_of(source: TextValue, args: argparse.Namespace) -> int:
    return source.index_of(args.token, args.start)


def _cmd_last_index_of(source: TextValue, args: argparse.Namespace) -> int:
    return source.last_index_of(args.token, args.start)


def _cmd_count(source: TextValue, args: argparse.Namespace) -> int:
    return source.count(args.token)


def _cmd_substring(source: TextValue, args: argparse.Namespace) -> str:
    return source.substring(args.start, args.length).to_text()


def _cmd_split(source: TextValue, args: argparse.Namespace) -> list[Any]:
    if args.spans:
        return [span.to_list() for span in source.split_spans(args.delimiter)]
    return [token.to_text() for token in source.split(args.delimiter)]


def _cmd_replace(source: TextValue, args: argparse.Namespace) -> str:
    return source.replace(args.search, args.replacement).to_text()


def _cmd_replace_first(source: TextValue, args: argparse.Namespace) -> str:
    return source.replace_first(args.search, args.replacement).to_text()


def _cmd_insert(source: TextValue, args: argparse.Namespace) -> str:
    return source.insert(args.index, args.value).to_text()


def _cmd_compare(source: TextValue, args: argparse.Namespace) -> int:
    return source.compare_to(TextValue.from_text(args.other))


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
def _emit(command: str, result: Any, output_format: str, stream: TextIO) -> None:
    if output_format == "json":
        print(json.dumps({"command": command, "result": result}, ensure_ascii=False), file=stream)
        return
    if isinstance(result, list):
        for item in result:
            print(_render_text(item), file=stream)
        return
    print(_render_text(result), file=stream)


def _render_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return " ".join(str(item) for item in value)
    return str(value)


def _report_error(exc: TextValueError, output_format: str, stream: TextIO) -> None:
    if output_format == "json":
        print(json.dumps(exc.details(), ensure_ascii=False), file=stream)
        return
    print(f"error: [{exc.code}] {exc.message}", file=stream)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------
def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textvalue",
        description="Run text value operations (search, split, replace, ...) from the shell.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.textvalue/settings.json path.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override persisted settings for this run (repeatable).",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMAT_CHOICES,
        help="Output format for results and errors.",
    )
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings payload and exit.",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    def add(name: str, handler: CommandHandler, help_text: str) -> argparse.ArgumentParser:
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("source", help="Text to operate on.")
        sub.set_defaults(handler=handler)
        return sub

    add("contains", _cmd_contains, "Test whether SOURCE contains TOKEN.").add_argument("token")
    add("starts-with", _cmd_starts_with, "Test whether SOURCE begins with TOKEN.").add_argument("token")
    add("count", _cmd_count, "Count non-overlapping occurrences of TOKEN.").add_argument("token")

    index_of = add("index-of", _cmd_index_of, "Find the first occurrence of TOKEN.")
    index_of.add_argument("token")
    index_of.add_argument("--start", type=int, default=0, help="Offset to begin searching from.")

    last_index_of = add("last-index-of", _cmd_last_index_of, "Find the last occurrence of TOKEN.")
    last_index_of.add_argument("token")
    last_index_of.add_argument("--start", type=int, default=None, help="Offset to search backwards from.")

    substring = add("substring", _cmd_substring, "Extract LENGTH characters starting at START.")
    substring.add_argument("start", type=int)
    substring.add_argument("length", type=int)

    split = add("split", _cmd_split, "Split SOURCE around DELIMITER.")
    split.add_argument("delimiter")
    split.add_argument("--spans", action="store_true", help="Print [start, end) offsets instead of tokens.")

    for name, handler, help_text in (
        ("replace", _cmd_replace, "Replace every SEARCH with REPLACEMENT."),
        ("replace-first", _cmd_replace_first, "Replace the first SEARCH with REPLACEMENT."),
    ):
        sub = add(name, handler, help_text)
        sub.add_argument("search")
        sub.add_argument("replacement")

    insert = add("insert", _cmd_insert, "Insert VALUE at INDEX.")
    insert.add_argument("index", type=int)
    insert.add_argument("value")

    add("compare", _cmd_compare, "Order SOURCE against OTHER (-1, 0 or 1).").add_argument("other")
    return parser


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if not items:
        return overrides

    known = Settings.__dataclass_fields__  # type: ignore[attr-defined]
    type_hints = get_type_hints(Settings)
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        key, raw_value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override is missing a field name.")
        if key not in known:
            raise ValueError(f"Unknown setting '{key}'.")
        overrides[key] = _coerce_value(type_hints.get(key, known[key].type), raw_value.strip())
    return overrides


def _coerce_value(annotation: Any, raw_value: str) -> Any:
    target = _resolve_annotation(annotation)
    if target is bool:
        return _parse_bool(raw_value)
    if raw_value.lower() in {"none", "null"} and type(None) in get_args(annotation):
        return None
    if target is dict:
        try:
            payload = json.loads(raw_value or "{}")
        except json.JSONDecodeError as exc:
            raise ValueError("Dict overrides must be valid JSON objects") from exc
        if not isinstance(payload, dict):
            raise ValueError("Dict overrides must be valid JSON objects")
        return payload
    return raw_value


def _resolve_annotation(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is None:
        return annotation
    if origin is dict:
        return dict
    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    if not args:
        return origin
    return args[0]


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot coerce '{value}' to a boolean.")


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
