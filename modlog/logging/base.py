from dataclasses import dataclass
from enum import Enum

from beartype.typing import Any, Iterable, Optional, Protocol, Union


class Level(str, Enum):
    """Severities understood by the logger service and its sinks"""

    DEBUG = "debug"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def parse(cls, value) -> "Level":
        """Accept a Level or its name in any case; raise ValueError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Invalid log level: {value}. Must be one of: debug, warn, error") from None


class Logger(Protocol):
    """Minimal capability handed to application code"""

    def debug(self, *args: Any) -> None:
        ...

    def warn(self, *args: Any) -> None:
        ...

    def error(self, *args: Any) -> None:
        ...


class NullLogger:
    """Logger that discards everything. Handy as a default argument."""

    def debug(self, *args):
        pass

    def warn(self, *args):
        pass

    def error(self, *args):
        pass


def dump_array(logger: Logger, message: str, values: Optional[Iterable]):
    """
    Log a header line followed by one indented debug line per value.

    Example:
        dump_array(logger, "Loaded packs:", ["core", "extras"])
        # Loaded packs:
        #     core
        #     extras
    """
    logger.debug(message)

    values = list(values) if values is not None else []
    if not values:
        logger.debug("NULL or EMPTY")
        return

    for value in values:
        logger.debug(f"    {value}")


@dataclass
class MessageMetadata:
    """Routing and prefix fields travelling with a single record"""

    module_name: Optional[str] = None
    context_name: Optional[str] = None
    context_id: Optional[Union[int, str]] = None
    app_name: Optional[str] = None
    pid: Optional[int] = None
