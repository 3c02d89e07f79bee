"""
Logger Handle - one level of indirection between module loggers and the backend

Module loggers keep a reference to the handle registered under LOGGER_HANDLE,
never to the LoggerService itself. Registering a new backend swaps the handle's
content, so every module logger bound earlier routes to the new backend on its
next call without being recreated.
"""

import logging
from threading import Lock

from modlog.logging.logger_service import LoggerService
from modlog.service_locator import ServiceRegistry, ServiceToken

logger = logging.getLogger(__name__)


class LoggerHandle:
    """
    Swappable reference to the active LoggerService.

    Reading `logger` is a single attribute load and takes no lock. `swap`
    serializes writers and bumps `version` so callers can tell that the
    backend changed.
    """

    def __init__(self, service: LoggerService):
        self._service = service
        self._version = 0
        self._lock = Lock()

    @property
    def logger(self) -> LoggerService:
        return self._service

    @property
    def version(self) -> int:
        return self._version

    def swap(self, service: LoggerService) -> LoggerService:
        """Install a new backend and return the previous one."""
        with self._lock:
            previous = self._service
            self._service = service
            self._version += 1
        return previous


LOGGER_HANDLE = ServiceToken[LoggerHandle]("LOGGER_HANDLE")

# Direct registration of the backend, kept for code that resolves the service itself
LOGGER = ServiceToken[LoggerService]("LOGGER")


def register_logger(registry: ServiceRegistry, service: LoggerService) -> LoggerHandle:
    """
    Make `service` the active backend.

    Creates and registers the handle on first use, afterwards only swaps its
    content. The service is also registered under LOGGER.

    Returns:
        The handle registered under LOGGER_HANDLE
    """
    handle = registry.try_resolve(LOGGER_HANDLE)
    if handle is None:
        handle = LoggerHandle(service)
        registry.register(LOGGER_HANDLE, handle)
    else:
        handle.swap(service)
        logger.debug("Replaced logger backend (handle version %d)", handle.version)

    registry.register(LOGGER, service)
    return handle
