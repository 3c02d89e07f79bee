"""
Unit tests for transports.py

Tests the reference sinks:
- Console output layout
- File output, console mirroring and pid file names
"""

import unittest
import tempfile
import shutil
from io import StringIO
from pathlib import Path

from modlog.logging.base import MessageMetadata
from modlog.logging.handle import register_logger
from modlog.logging.logger_service import PID
from modlog.logging.module_logger import create_logger
from modlog.logging.transports import create_console_logger, create_file_logger, pid_file_path
from modlog.service_locator import ServiceRegistry


class TestConsoleLogger(unittest.TestCase):
    """Test create_console_logger"""

    def setUp(self):
        self.output = StringIO()
        self.service = create_console_logger("api", stream=self.output)

    def tearDown(self):
        self.output.close()

    def test_writes_formatted_line(self):
        self.service.log("warn", "disk almost full", MessageMetadata(module_name="db"))

        line = self.output.getvalue()
        self.assertTrue(line.endswith(f" WARN api:{PID}:db disk almost full\n"))
        self.assertRegex(line, r"^\d{2}:\d{2}:\d{2}:\d{3} ")

    def test_one_line_per_call(self):
        registry = ServiceRegistry()
        register_logger(registry, self.service)
        logger = create_logger("packs", registry)

        logger.debug("loaded %d packs", 2)
        logger.error("failed", {"pack": "core"})

        lines = self.output.getvalue().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertIn(f"DEBUG api:{PID}:packs loaded 2 packs", lines[0])
        self.assertIn(f'ERROR api:{PID}:packs failed {{"pack": "core"}}', lines[1])


class TestFileLogger(unittest.TestCase):
    """Test create_file_logger"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.log_file = Path(self.temp_dir) / "logs" / "server.log"

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_writes_plain_lines(self):
        service = create_file_logger(self.log_file, app_name="server", console_transport=False)

        service.log("error", "boom", MessageMetadata(module_name="db"))
        service.log("debug", "ok")
        service.log_method.close()

        lines = self.log_file.read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].endswith(f" ERROR server:{PID}:db boom"))
        self.assertTrue(lines[1].endswith(f" DEBUG server:{PID} ok"))

    def test_mirrors_to_console(self):
        output = StringIO()
        service = create_file_logger(self.log_file, console_transport=True, stream=output)

        service.log("warn", "both places")
        service.log_method.close()

        self.assertIn("both places", self.log_file.read_text(encoding="utf-8"))
        self.assertIn(f"WARN {PID} both places", output.getvalue())

    def test_rotation_settings_are_passed_through(self):
        service = create_file_logger(self.log_file, console_transport=False, max_bytes="1KiB", max_files=2)

        handler = service.log_method.handler
        self.assertEqual(handler.max_bytes, 1024)
        self.assertEqual(handler.max_files, 2)
        service.log_method.close()

    def test_append_pid_to_file_name(self):
        service = create_file_logger(self.log_file, console_transport=False, append_pid_to_file_name=True)

        service.log("debug", "hello")
        service.log_method.close()

        expected = self.log_file.with_name(f"server_{PID}.log")
        self.assertEqual(service.log_method.handler.filepath, expected.resolve())
        self.assertTrue(expected.exists())
        self.assertFalse(self.log_file.exists())

    def test_pid_file_path(self):
        self.assertEqual(pid_file_path("/var/log/app.log"), Path(f"/var/log/app_{PID}.log").resolve())


if __name__ == "__main__":
    unittest.main()
