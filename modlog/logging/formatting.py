"""
Formatting - turns logged values into message strings and message strings into lines

Two concerns live here:
- rendering the variadic values passed to debug/warn/error into one message
- laying out a finished record as "HH:MM:SS:mmm LEVEL prefix message" for the
  reference sinks, optionally colored for a terminal

Rendering rules:
    str                         verbatim
    None, bool, int, float      str()
    dict, list, tuple, set,     JSON with sorted keys; sets become sorted lists,
    dataclass instances         anything JSON can't encode falls back to str()
    exceptions                  type, message and traceback when available
    anything else               str()

When the first value is a string holding placeholders (%s %d %i %f %j %o %%)
they consume the following values in order; leftovers are appended separated
by spaces.
"""

import json
import re
import traceback
from dataclasses import asdict, is_dataclass
from datetime import datetime

import click
from beartype.typing import Any, Optional, Sequence

from modlog.logging.base import Level, MessageMetadata

_PLACEHOLDER = re.compile(r"%[sdifjo%]")

LEVEL_COLORS = {
    Level.WARN: "bright_yellow",
    Level.ERROR: "red",
}


def _jsonable(value: Any) -> Any:
    """Convert structured values into something json.dumps accepts."""
    if is_dataclass(value) and not isinstance(value, type):
        return _jsonable(asdict(value))
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_jsonable(item) for item in value), key=str)
    return value


def _render_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()


def render_value(value: Any) -> str:
    """Render a single loggable value."""
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, (bool, int, float)):
        return str(value)
    if isinstance(value, BaseException):
        return _render_exception(value)
    if isinstance(value, (dict, list, tuple, set, frozenset)) or (is_dataclass(value) and not isinstance(value, type)):
        return json.dumps(_jsonable(value), sort_keys=True, default=str)
    return str(value)


def _apply_placeholder(placeholder: str, value: Any) -> str:
    if placeholder in ("%d", "%i"):
        try:
            return str(int(value))
        except (TypeError, ValueError):
            return "NaN"
    if placeholder == "%f":
        try:
            return str(float(value))
        except (TypeError, ValueError):
            return "NaN"
    if placeholder == "%j":
        return json.dumps(_jsonable(value), sort_keys=True, default=str)
    return render_value(value)


def format_args(args: Sequence[Any]) -> str:
    """
    Join logged values into a single message.

    Example:
        format_args(["loaded %d packs from", 3, "/opt/packs"])
        # 'loaded 3 packs from /opt/packs'
    """
    if not args:
        return ""

    first, rest = args[0], list(args[1:])
    if not (isinstance(first, str) and rest and "%" in first):
        return " ".join(render_value(value) for value in args)

    consumed = 0

    def substitute(match):
        nonlocal consumed
        placeholder = match.group(0)
        if placeholder == "%%":
            return "%"
        if consumed >= len(rest):
            return placeholder
        value = rest[consumed]
        consumed += 1
        return _apply_placeholder(placeholder, value)

    head = _PLACEHOLDER.sub(substitute, first)
    return " ".join([head] + [render_value(value) for value in rest[consumed:]])


class MessagePrefixBuilder:
    """Colon-joins prefix parts, skipping the empty ones"""

    def __init__(self):
        self.prefix = ""

    def append(self, value) -> "MessagePrefixBuilder":
        if value is None or value == "":
            return self

        if self.prefix:
            self.prefix += ":"

        self.prefix += str(value)
        return self

    def done(self) -> str:
        return self.prefix


def get_level_string(level) -> str:
    return Level.parse(level).value.upper()


def format_timestamp(moment: datetime) -> str:
    return f"{moment:%H:%M:%S}:{moment.microsecond // 1000:03d}"


def build_format_message(level, message: str, meta: MessageMetadata, now: Optional[datetime] = None) -> str:
    """
    Lay out a record for the reference sinks.

    Example:
        build_format_message("warn", "disk almost full", MessageMetadata(app_name="api", pid=42, module_name="db"))
        # '14:03:07:281 WARN api:42:db disk almost full'
    """
    prefix = (
        MessagePrefixBuilder()
        .append(meta.app_name)
        .append(meta.pid)
        .append(meta.context_name)
        .append(meta.context_id)
        .append(meta.module_name)
        .done()
    )

    return f"{format_timestamp(now or datetime.now())} {get_level_string(level)} {prefix} {message}"


def add_color(level, line: str) -> str:
    color = LEVEL_COLORS.get(Level.parse(level))
    if color is None:
        return line
    return click.style(line, fg=color)
