"""
Transports - reference sinks for the logger service

Both sinks lay records out with build_format_message:

    HH:MM:SS:mmm LEVEL app:pid:context:id:module message

The console sink colors warn and error lines; the file sink writes plain text
to a rotating file and can mirror every line to the console.
"""

import sys
from pathlib import Path

import click
from beartype.typing import Optional, TextIO, Union

from modlog.logging.base import MessageMetadata
from modlog.logging.file_handler import DEFAULT_MAX_BYTES, DEFAULT_MAX_FILES, RotatingFileHandler
from modlog.logging.formatting import add_color, build_format_message
from modlog.logging.logger_service import PID, LoggerService


class ConsoleLogMethod:
    """Writes colored lines to a stream (stdout unless told otherwise)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def __call__(self, level: str, message: str, meta: MessageMetadata):
        line = add_color(level, build_format_message(level, message, meta))
        click.echo(line, file=self.stream or sys.stdout)


class FileLogMethod:
    """Appends plain lines to a rotating file, optionally echoing them to the console."""

    def __init__(self, handler: RotatingFileHandler, console: Optional[ConsoleLogMethod] = None):
        self.handler = handler
        self.console = console

    def __call__(self, level: str, message: str, meta: MessageMetadata):
        line = build_format_message(level, message, meta)
        self.handler.write(line + "\n")
        if self.console is not None:
            click.echo(add_color(level, line), file=self.console.stream or sys.stdout)

    def close(self):
        self.handler.close()


def pid_file_path(file_path: Union[str, Path]) -> Path:
    """logs/app.log -> logs/app_<pid>.log"""
    path = Path(file_path)
    return path.with_name(f"{path.stem}_{PID}{path.suffix}").resolve()


def create_console_logger(app_name: Optional[str] = None, stream: Optional[TextIO] = None) -> LoggerService:
    return LoggerService(app_name, ConsoleLogMethod(stream))


def create_file_logger(
    file_path: Union[str, Path],
    app_name: Optional[str] = None,
    console_transport: bool = True,
    append_pid_to_file_name: bool = False,
    max_bytes: Union[int, str] = DEFAULT_MAX_BYTES,
    max_files: int = DEFAULT_MAX_FILES,
    stream: Optional[TextIO] = None,
) -> LoggerService:
    """
    Logger service writing to a rotating file.

    Args:
        file_path: Log file location; parent directories are created
        app_name: Stamped on every record
        console_transport: Also print each line to the console
        append_pid_to_file_name: Insert the process id before the extension
        max_bytes: Rotation threshold, int or human readable string
        max_files: Files kept in total, the active file included
        stream: Console stream used when console_transport is on

    Example:
        service = create_file_logger("logs/server.log", app_name="server", console_transport=False)
        register_logger(registry, service)
    """
    if append_pid_to_file_name:
        file_path = pid_file_path(file_path)

    handler = RotatingFileHandler(file_path, max_bytes=max_bytes, max_files=max_files)
    console = ConsoleLogMethod(stream) if console_transport else None
    return LoggerService(app_name, FileLogMethod(handler, console))
