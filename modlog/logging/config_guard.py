"""
Config Guard - temporary override of the logger service filter options

The guard layers the given fields over the options in effect when it is
created and puts the saved options object back on dispose. Restoring is not a
stack: disposing a guard discards any configuration made by other code,
including guards created after it, while it was active.

Fields not passed to the guard keep their saved value. In particular an
enable-only guard does not clear a disabled set configured earlier, and since
a disabled set is authoritative the enable list has no effect in that case.

Usage:
    with disable_logger(registry, "db"):
        run_noisy_migration()

    guard = disable_logger_but(registry, "api", "auth")
    ...
    guard.dispose()
"""

from dataclasses import replace

from beartype.typing import Iterable, Optional

from modlog.logging.handle import LOGGER
from modlog.logging.logger_service import LoggerOptions, LoggerService
from modlog.service_locator import ServiceRegistry


class LoggerConfigGuard:
    """
    Apply `overrides` to the registered logger service until disposed.

    Without a registered service the guard is inert and dispose does nothing.
    """

    def __init__(self, registry: ServiceRegistry, **overrides):
        self.overrides = overrides
        self.logger: Optional[LoggerService] = registry.try_resolve(LOGGER)
        self.original_options: Optional[LoggerOptions] = None
        self._disposed = False

        if self.logger is not None:
            self.original_options = self.logger.options
            self.logger.configure(replace(self.original_options, **overrides))

    @property
    def is_active(self) -> bool:
        return self.logger is not None and not self._disposed

    def dispose(self):
        """Restore the options saved at construction. Safe to call twice."""
        if not self.is_active:
            return

        self.logger.configure(self.original_options)
        self._disposed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()


def disable_logger(registry: ServiceRegistry, name: str) -> LoggerConfigGuard:
    return LoggerConfigGuard(registry, disabled={name})


def disable_logger_but(registry: ServiceRegistry, *names: str) -> LoggerConfigGuard:
    return LoggerConfigGuard(registry, enabled=set(names))


def disable_loggers(registry: ServiceRegistry, names: Iterable[str]) -> LoggerConfigGuard:
    return LoggerConfigGuard(registry, disabled=set(names))


def is_verbose_on(registry: ServiceRegistry) -> bool:
    """Verbose flag of the registered logger service; True when there is none."""
    service = registry.try_resolve(LOGGER)
    if service is None:
        return True

    return service.is_verbose
