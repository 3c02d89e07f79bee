"""
File Handler - size based rotating log file

Appends lines to a file and rotates it once it reaches a size threshold,
keeping a fixed number of files in total (the active one included).

Rotation pattern with max_files=5:
    app.log     -> app.log.1
    app.log.1   -> app.log.2
    app.log.2   -> app.log.3
    app.log.3   -> app.log.4
    app.log.4   -> deleted

Usage:
    from modlog.logging.file_handler import RotatingFileHandler

    with RotatingFileHandler("/var/log/api/app.log", max_bytes="25MiB") as handler:
        handler.write("12:00:00:000 DEBUG api:4242 started\n")
"""

import logging
import os
from pathlib import Path
from threading import Lock

from beartype.typing import Union
from humanfriendly import parse_size

DEFAULT_MAX_BYTES = 25 * 1024 * 1024
DEFAULT_MAX_FILES = 5

logger = logging.getLogger(__name__)


def resolve_size(size: Union[int, str]) -> int:
    """Accept a byte count or a human readable size such as '25MB' or '1 MiB'."""
    if isinstance(size, int):
        return size
    return parse_size(str(size))


class RotatingFileHandler:
    """
    Thread-safe appender with size based rotation.

    Example:
        handler = RotatingFileHandler("app.log", max_bytes=1024, max_files=3)
        handler.write("line\n")
        handler.close()
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        max_bytes: Union[int, str] = DEFAULT_MAX_BYTES,
        max_files: int = DEFAULT_MAX_FILES,
        encoding: str = "utf-8",
    ):
        """
        Args:
            filepath: Path to the active log file
            max_bytes: Size that triggers rotation (int or human readable string)
            max_files: Files kept in total, the active file included
            encoding: File encoding
        """
        if max_files < 1:
            raise ValueError("max_files must be at least 1")

        self.filepath = Path(filepath)
        self.max_bytes = resolve_size(max_bytes)
        self.max_files = max_files
        self.encoding = encoding
        self._file = None
        self._lock = Lock()
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    @property
    def backup_count(self) -> int:
        return self.max_files - 1

    def write(self, content: str):
        """Append content, rotating first if the file has reached max_bytes."""
        with self._lock:
            if self._should_rotate():
                self._rotate()

            if self._file is None or self._file.closed:
                self._file = open(self.filepath, "a", encoding=self.encoding)

            self._file.write(content)
            self._file.flush()

    def _should_rotate(self) -> bool:
        try:
            return self.filepath.stat().st_size >= self.max_bytes
        except FileNotFoundError:
            return False

    def _rotate(self):
        if self._file and not self._file.closed:
            self._file.close()
            self._file = None

        if self.backup_count == 0:
            self.filepath.unlink()
            return

        oldest = Path(f"{self.filepath}.{self.backup_count}")
        if oldest.exists():
            oldest.unlink()

        for i in range(self.backup_count - 1, 0, -1):
            src = Path(f"{self.filepath}.{i}")
            if src.exists():
                src.replace(Path(f"{self.filepath}.{i + 1}"))

        self.filepath.replace(Path(f"{self.filepath}.1"))
        logger.debug("Rotated %s (max %d files)", self.filepath, self.max_files)

    def flush(self):
        with self._lock:
            if self._file and not self._file.closed:
                self._file.flush()
                os.fsync(self._file.fileno())

    def close(self):
        with self._lock:
            if self._file and not self._file.closed:
                self._file.flush()
                self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
