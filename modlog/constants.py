from modlog import __version__

FAULT_MAPPING = dict(
    invalid_config="Logging configuration is not valid: {error_message}",
    config_file_missing="Configuration file ({file_path}) does not exist.",
    emit_failed="Unable to emit log line: {error_message}",
)

TOOL_VERSION = f"""modlog v{__version__}
Module logger facade and configuration tool"""

TOOL_USAGE = f"""{TOOL_VERSION}
Supported commands:
  - check-config: print the effective logging configuration
  - emit: send one line through a module logger"""

DEFAULT_CONFIG_FILES = ("modlog.yml", "modlog.yaml")
