"""
modlog logging facade

Module code asks for a named logger and never sees the backend:

    from modlog.logging import create_logger

    logger = create_logger("packs.loader", registry)
    logger.debug("loaded %d packs", 3)

The host application owns the registry and decides where records go:

    from modlog.service_locator import ServiceRegistry
    from modlog.logging import create_console_logger, register_logger

    registry = ServiceRegistry()
    register_logger(registry, create_console_logger("server"))

Registering another backend later reroutes every module logger already bound.

Configuration:
    # Via environment variables
    export MODLOG_OUTPUT=both
    export MODLOG_FILE=/var/log/server/server.log
    export MODLOG_DISABLED=db,cache

    # Via configuration file
    from modlog.logging.config import LoggingConfig
    LoggingConfig.setup_logging(registry, config_path="modlog.yml")
"""

from modlog.logging.base import Level, Logger, MessageMetadata, NullLogger, dump_array
from modlog.logging.config_guard import (
    LoggerConfigGuard,
    disable_logger,
    disable_logger_but,
    disable_loggers,
    is_verbose_on,
)
from modlog.logging.handle import LOGGER, LOGGER_HANDLE, LoggerHandle, register_logger
from modlog.logging.logger_service import LoggerOptions, LoggerService
from modlog.logging.module_logger import BindPolicy, LoggerState, ModuleLogger, create_logger
from modlog.logging.transports import create_console_logger, create_file_logger

__all__ = [
    "BindPolicy",
    "Level",
    "Logger",
    "LoggerConfigGuard",
    "LoggerHandle",
    "LoggerOptions",
    "LoggerService",
    "LoggerState",
    "LOGGER",
    "LOGGER_HANDLE",
    "MessageMetadata",
    "ModuleLogger",
    "NullLogger",
    "create_console_logger",
    "create_file_logger",
    "create_logger",
    "disable_logger",
    "disable_logger_but",
    "disable_loggers",
    "dump_array",
    "is_verbose_on",
    "register_logger",
]
