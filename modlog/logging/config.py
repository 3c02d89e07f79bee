"""
Configuration System - layered logging configuration

Builds and registers a logger service from defaults, a YAML file, environment
variables and keyword overrides, with `${VAR}` substitution in string values.

Example configuration file (modlog.yml):
    logging:
      app_name: api
      output: both          # console, file or both
      file_path: /var/log/${ENVIRONMENT}/api.log
      max_size: 25MiB
      max_files: 5
      append_pid: false
      verbose: true
      disabled: [db, cache]
"""

import logging
import os
import re
from pathlib import Path

import yaml
from beartype.typing import Any, Dict, Optional, TextIO, Tuple
from humanfriendly import InvalidSize, parse_size

from modlog.exceptions import ConfigurationError
from modlog.logging.handle import register_logger
from modlog.logging.logger_service import LoggerOptions, LoggerService
from modlog.logging.transports import create_console_logger, create_file_logger
from modlog.service_locator import ServiceRegistry

logger = logging.getLogger(__name__)

VALID_OUTPUTS = ("console", "file", "both")
TRUE_VALUES = ("true", "yes", "1", "on")


def _name_list(value):
    return None if value is None else [str(name) for name in value]


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)


class LoggingConfig:
    """
    Centralized logging configuration.

    Precedence: overrides > environment > file > defaults
    """

    DEFAULT_CONFIG = {
        "app_name": None,
        "output": "console",
        "file_path": None,
        "max_size": "25MiB",
        "max_files": 5,
        "append_pid": False,
        "verbose": True,
        "enabled": None,
        "disabled": None,
    }

    ENV_PREFIX = "MODLOG_"

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from file and environment.

        Args:
            config_path: Optional YAML file with a `logging` section

        Returns:
            Configuration dictionary
        """
        config = cls.DEFAULT_CONFIG.copy()

        if config_path and Path(config_path).exists():
            file_config = cls._load_from_file(config_path)
            if file_config and isinstance(file_config.get("logging"), dict):
                config.update(file_config["logging"])
        elif config_path:
            logger.warning("Logging config file %s not found, using defaults", config_path)

        config = cls._apply_env_overrides(config)
        return cls._substitute_env_vars(config)

    @classmethod
    def _load_from_file(cls, config_path: str) -> Optional[Dict[str, Any]]:
        try:
            with open(config_path, encoding="utf-8") as f:
                return yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            logger.warning("Error loading logging config file %s: %s", config_path, e)
            return None

    @classmethod
    def _apply_env_overrides(cls, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Environment variables:
            MODLOG_APP_NAME: App name stamped on records
            MODLOG_OUTPUT: console, file or both
            MODLOG_FILE: Log file path
            MODLOG_MAX_SIZE: Rotation threshold (e.g. 25MiB)
            MODLOG_MAX_FILES: Files kept in total
            MODLOG_APPEND_PID: Insert pid into the file name (true/false)
            MODLOG_VERBOSE: Verbose flag (true/false)
            MODLOG_ENABLED: Comma separated allow list of module names
            MODLOG_DISABLED: Comma separated deny list of module names
        """
        env_mappings = {
            "APP_NAME": "app_name",
            "OUTPUT": "output",
            "FILE": "file_path",
            "MAX_SIZE": "max_size",
        }
        for env_name, config_key in env_mappings.items():
            value = os.environ.get(cls.ENV_PREFIX + env_name)
            if value is not None:
                config[config_key] = value

        max_files = os.environ.get(cls.ENV_PREFIX + "MAX_FILES")
        if max_files is not None:
            try:
                config["max_files"] = int(max_files)
            except ValueError:
                logger.warning("Ignoring non-numeric %sMAX_FILES=%r", cls.ENV_PREFIX, max_files)

        for env_name, config_key in (("APPEND_PID", "append_pid"), ("VERBOSE", "verbose")):
            value = os.environ.get(cls.ENV_PREFIX + env_name)
            if value is not None:
                config[config_key] = value.lower() in TRUE_VALUES

        for env_name, config_key in (("ENABLED", "enabled"), ("DISABLED", "disabled")):
            value = os.environ.get(cls.ENV_PREFIX + env_name)
            if value is not None:
                config[config_key] = [name.strip() for name in value.split(",") if name.strip()]

        return config

    @classmethod
    def _substitute_env_vars(cls, config: Any) -> Any:
        """Recursively replace ${VAR_NAME} with the environment value; unknown names are left as is."""
        if isinstance(config, str):

            def replace_env(match):
                return os.environ.get(match.group(1), match.group(0))

            return re.sub(r"\$\{([^}]+)\}", replace_env, config)

        elif isinstance(config, dict):
            return {k: cls._substitute_env_vars(v) for k, v in config.items()}

        elif isinstance(config, list):
            return [cls._substitute_env_vars(item) for item in config]

        return config

    @classmethod
    def check(cls, config: Dict[str, Any]):
        """
        Raise ConfigurationError for the first invalid value found.
        """
        output = config.get("output", "console")
        if output not in VALID_OUTPUTS:
            raise ConfigurationError("output", f"Must be one of: {', '.join(VALID_OUTPUTS)}")

        if output in ("file", "both") and not config.get("file_path"):
            raise ConfigurationError("file_path", f"Required when output is '{output}'")

        try:
            parse_size(str(config.get("max_size")))
        except InvalidSize as e:
            raise ConfigurationError("max_size", str(e)) from e

        max_files = config.get("max_files")
        if isinstance(max_files, bool) or not isinstance(max_files, int) or max_files < 1:
            raise ConfigurationError("max_files", "Must be a positive integer")

        for key in ("enabled", "disabled"):
            value = config.get(key)
            if value is not None and not isinstance(value, (list, tuple, set, frozenset)):
                raise ConfigurationError(key, "Must be a list of module names")

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> Tuple[bool, str]:
        """
        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            cls.check(config)
        except ConfigurationError as e:
            return False, str(e)
        return True, ""

    @classmethod
    def build_options(cls, config: Dict[str, Any]) -> LoggerOptions:
        return LoggerOptions.from_config(
            {
                "enabled": _name_list(config.get("enabled")),
                "disabled": _name_list(config.get("disabled")),
                "verbose": _flag(config.get("verbose", True)),
            }
        )

    @classmethod
    def create_service(cls, config: Dict[str, Any], stream: Optional[TextIO] = None) -> LoggerService:
        output = config.get("output", "console")
        if output == "console":
            service = create_console_logger(config.get("app_name"), stream=stream)
        else:
            service = create_file_logger(
                config["file_path"],
                app_name=config.get("app_name"),
                console_transport=output == "both",
                append_pid_to_file_name=_flag(config.get("append_pid", False)),
                max_bytes=config.get("max_size"),
                max_files=config.get("max_files"),
                stream=stream,
            )

        service.configure(cls.build_options(config))
        return service

    @classmethod
    def setup_logging(
        cls, registry: ServiceRegistry, config_path: Optional[str] = None, stream: Optional[TextIO] = None, **overrides
    ) -> LoggerService:
        """
        Create a logger service from configuration and register it.

        Args:
            registry: Registry receiving the backend
            config_path: Optional YAML configuration file
            stream: Console stream (default: stdout)
            **overrides: Configuration overrides (e.g. app_name="api")

        Raises:
            ConfigurationError: the merged configuration is invalid

        Example:
            LoggingConfig.setup_logging(registry, "modlog.yml", output="console")
        """
        config = cls.load(config_path)
        config.update(overrides)
        cls.check(config)

        service = cls.create_service(config, stream=stream)
        register_logger(registry, service)
        return service
