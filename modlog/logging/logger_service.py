"""
Logger Service - the backend every module logger routes to

Wraps a low-level log method (the sink) with module filtering and process
metadata. The filter options are an immutable LoggerOptions value that is
replaced wholesale; nothing mutates an options object once it is installed,
so a saved reference can always be put back verbatim.

Usage:
    from modlog.logging.base import MessageMetadata
    from modlog.logging.logger_service import LoggerService, LoggerOptions

    def sink(level, message, meta):
        print(level, meta.module_name, message)

    service = LoggerService("my-app", sink)
    service.configure(LoggerOptions(disabled={"db"}))
    service.log("debug", "dropped", MessageMetadata(module_name="db"))
    service.log("warn", "emitted", MessageMetadata(module_name="api"))
"""

import os
from dataclasses import dataclass, replace

from beartype.typing import Callable, Iterable, Optional, Set
from serde import deserialize, field, from_dict, serialize, to_dict

from modlog.logging.base import Level, MessageMetadata

# Captured once; every record carries the pid of the process that imported us.
PID = os.getpid()

LogMethod = Callable[[str, str, MessageMetadata], None]


@serialize
@deserialize
@dataclass(frozen=True)
class LoggerOptions:
    """Module filter configuration.

    When `disabled` is set it is authoritative and `enabled` is ignored.
    Otherwise a set `enabled` acts as an allow list. Records without a
    module name are never filtered.
    """

    enabled: Optional[Set[str]] = field(default=None)
    disabled: Optional[Set[str]] = field(default=None)
    verbose: bool = field(default=True)

    def accepts(self, module_name: str) -> bool:
        if self.disabled is not None:
            return module_name not in self.disabled

        if self.enabled is not None:
            return module_name in self.enabled

        return True

    def to_config(self) -> dict:
        """Plain dict with sorted lists, suitable for YAML output."""
        data = to_dict(self)
        for key in ("enabled", "disabled"):
            if data.get(key) is not None:
                data[key] = sorted(data[key])
        return data

    @classmethod
    def from_config(cls, data: Optional[dict]) -> "LoggerOptions":
        return from_dict(cls, data or {})


class LoggerService:
    """
    Filters records by module name, stamps app name and pid, and forwards to
    the log method.

    Example:
        service = LoggerService("api", console_log_method)
        service.disable(["db"])
        service.is_disabled("db")  # True
    """

    def __init__(self, app_name: Optional[str], log_method: LogMethod, options: Optional[LoggerOptions] = None):
        self.app_name = app_name
        self.log_method = log_method
        self.options = options if options is not None else LoggerOptions()

    def log(self, level, message: str, meta: Optional[MessageMetadata] = None):
        """
        Filter and emit a record.

        Filtered records are dropped silently. Errors raised by the log method
        propagate to the caller.

        Args:
            level: debug, warn or error
            message: Rendered message
            meta: Routing fields; module_name drives filtering
        """
        level = Level.parse(level)
        if meta is None:
            meta = MessageMetadata()

        if meta.module_name and not self.options.accepts(meta.module_name):
            return

        if self.app_name:
            meta.app_name = self.app_name

        meta.pid = PID

        self.log_method(level.value, message, meta)

    def configure(self, options: LoggerOptions):
        """Replace the filter options. No merging happens here."""
        self.options = options

    def disable(self, module_names: Iterable[str]):
        """Add module names to the disabled set of the current options."""
        disabled = set(self.options.disabled or ())
        disabled.update(module_names)
        self.options = replace(self.options, disabled=disabled)

    def is_disabled(self, module_name: str) -> bool:
        disabled = self.options.disabled
        return disabled is not None and module_name in disabled

    @property
    def is_verbose(self) -> bool:
        return self.options.verbose
