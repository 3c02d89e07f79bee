"""
Module Logger - cheap per-module entry point into the logger service

A ModuleLogger can be created at any time, before or after a backend is
registered. It binds lazily on its first log call:

    UNBOUND --(handle found, module not disabled)--> ACTIVE
    UNBOUND --(handle found, module disabled)------> DISABLED
    UNBOUND --(no backend, BindPolicy.PERMANENT)---> DISABLED
    UNBOUND --(no backend, BindPolicy.RETRY)-------> UNBOUND

ACTIVE and DISABLED are final until `rebind()` is called explicitly. The
disabled decision is taken once, at bind time.

Usage:
    from modlog.logging.module_logger import create_logger

    logger = create_logger("packs.loader", registry)
    logger.debug("loaded %d packs", 3)
    logger.error("failed to load", pack_name, exc)
"""

from enum import Enum

from beartype.typing import Optional, Union

from modlog.logging.base import Level, MessageMetadata
from modlog.logging.formatting import format_args
from modlog.logging.handle import LOGGER, LOGGER_HANDLE, LoggerHandle
from modlog.service_locator import ServiceRegistry


class LoggerState(Enum):
    UNBOUND = "unbound"
    ACTIVE = "active"
    DISABLED = "disabled"


class BindPolicy(Enum):
    """What a module logger does when it finds no backend at bind time"""

    # Give up for good; the logger stays silent even if a backend shows up later.
    PERMANENT = "permanent"
    # Stay unbound and try again on the next log call.
    RETRY = "retry"


class ModuleLogger:
    """
    Named logger routing through the LOGGER_HANDLE of a registry.

    Example:
        logger = ModuleLogger("api", registry)
        logger.warn("slow request", {"path": "/items", "ms": 1200})
    """

    def __init__(
        self,
        name: str,
        registry: ServiceRegistry,
        policy: BindPolicy = BindPolicy.PERMANENT,
        context_name: Optional[str] = None,
        context_id: Optional[Union[int, str]] = None,
    ):
        self.name = name
        self.registry = registry
        self.policy = policy
        self.context_name = context_name
        self.context_id = context_id
        self._handle: Optional[LoggerHandle] = None
        self._state = LoggerState.UNBOUND

    @property
    def state(self) -> LoggerState:
        return self._state

    @property
    def is_enabled(self) -> bool:
        """True unless binding already decided this logger is silent."""
        return self._state is not LoggerState.DISABLED

    def debug(self, *args):
        self._log(Level.DEBUG, args)

    def warn(self, *args):
        self._log(Level.WARN, args)

    def error(self, *args):
        self._log(Level.ERROR, args)

    def attach_to_logger_service(self) -> LoggerState:
        """
        Bind to the registry's handle.

        Falls back to a service registered directly under LOGGER, wrapped in a
        private handle that never sees later backend swaps.
        """
        handle = self.registry.try_resolve(LOGGER_HANDLE)
        if handle is None:
            service = self.registry.try_resolve(LOGGER)
            if service is None:
                if self.policy is BindPolicy.PERMANENT:
                    self._state = LoggerState.DISABLED
                return self._state

            handle = LoggerHandle(service)

        self._handle = handle
        if handle.logger.is_disabled(self.name):
            self._state = LoggerState.DISABLED
        else:
            self._state = LoggerState.ACTIVE

        return self._state

    def rebind(self):
        """Forget the current binding; the next log call binds again."""
        self._handle = None
        self._state = LoggerState.UNBOUND

    def with_context(self, context_name: str, context_id: Optional[Union[int, str]] = None) -> "ModuleLogger":
        """Return a logger for the same module whose records carry a context name and id."""
        child = ModuleLogger(self.name, self.registry, self.policy, context_name, context_id)
        child._handle = self._handle
        child._state = self._state
        return child

    def _log(self, level: Level, args):
        if self._state is LoggerState.UNBOUND:
            self.attach_to_logger_service()

        if self._state is not LoggerState.ACTIVE:
            return

        meta = MessageMetadata(module_name=self.name, context_name=self.context_name, context_id=self.context_id)
        self._handle.logger.log(level, format_args(args), meta)

    def __repr__(self):
        return f"ModuleLogger({self.name!r}, state={self._state.value})"


def create_logger(name: str, registry: ServiceRegistry, policy: BindPolicy = BindPolicy.PERMANENT) -> ModuleLogger:
    return ModuleLogger(name, registry, policy)
