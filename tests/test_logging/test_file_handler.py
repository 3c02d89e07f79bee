"""
Unit tests for file_handler.py

Tests file logging functionality including:
- File and directory creation
- Size based rotation and the number of files kept
- Human readable size thresholds
- Cleanup
"""

import unittest
import tempfile
import shutil
from pathlib import Path

from modlog.logging.file_handler import DEFAULT_MAX_BYTES, DEFAULT_MAX_FILES, RotatingFileHandler, resolve_size


class TestResolveSize(unittest.TestCase):
    """Test resolve_size helper"""

    def test_integers_pass_through(self):
        self.assertEqual(resolve_size(1024), 1024)

    def test_human_readable_sizes(self):
        self.assertEqual(resolve_size("1KiB"), 1024)
        self.assertEqual(resolve_size("1KB"), 1000)
        self.assertEqual(resolve_size("25MiB"), DEFAULT_MAX_BYTES)


class TestRotatingFileHandler(unittest.TestCase):
    """Test RotatingFileHandler class"""

    def setUp(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.log_file = Path(self.temp_dir) / "test.log"

    def tearDown(self):
        """Clean up temp directory"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_handler_initialization(self):
        handler = RotatingFileHandler(str(self.log_file), max_bytes="2KiB", max_files=3)

        self.assertEqual(handler.filepath, self.log_file)
        self.assertEqual(handler.max_bytes, 2048)
        self.assertEqual(handler.max_files, 3)
        self.assertEqual(handler.backup_count, 2)

        handler.close()

    def test_defaults(self):
        handler = RotatingFileHandler(self.log_file)

        self.assertEqual(handler.max_bytes, 25 * 1024 * 1024)
        self.assertEqual(handler.max_files, DEFAULT_MAX_FILES)

        handler.close()

    def test_invalid_max_files(self):
        with self.assertRaises(ValueError):
            RotatingFileHandler(self.log_file, max_files=0)

    def test_creates_log_directory(self):
        nested_log = Path(self.temp_dir) / "subdir" / "logs" / "test.log"

        handler = RotatingFileHandler(str(nested_log))
        handler.write("Test message\n")
        handler.close()

        self.assertTrue(nested_log.parent.exists())
        self.assertTrue(nested_log.exists())

    def test_writes_to_file(self):
        handler = RotatingFileHandler(str(self.log_file))

        handler.write("Test message 1\n")
        handler.write("Test message 2\n")
        handler.close()

        content = self.log_file.read_text(encoding="utf-8")
        self.assertEqual(content, "Test message 1\nTest message 2\n")

    def test_appends_to_existing_file(self):
        self.log_file.write_text("earlier\n", encoding="utf-8")

        with RotatingFileHandler(self.log_file) as handler:
            handler.write("later\n")

        self.assertEqual(self.log_file.read_text(encoding="utf-8"), "earlier\nlater\n")

    def test_rotation_on_size(self):
        handler = RotatingFileHandler(str(self.log_file), max_bytes=100, max_files=4)

        for i in range(20):
            handler.write(f"Log message {i} with some content\n")

        handler.close()

        self.assertTrue(Path(f"{self.log_file}.1").exists(), "Backup file .1 should exist")
        self.assertLess(self.log_file.stat().st_size, 100 + 40)

    def test_max_files_limit(self):
        """Test that only max_files files are kept in total"""
        handler = RotatingFileHandler(str(self.log_file), max_bytes=50, max_files=3)

        for i in range(50):
            handler.write(f"Log message {i} with content to fill up space\n")

        handler.close()

        self.assertTrue(self.log_file.exists())
        self.assertTrue(Path(f"{self.log_file}.1").exists(), "Backup .1 should exist")
        self.assertTrue(Path(f"{self.log_file}.2").exists(), "Backup .2 should exist")
        self.assertFalse(Path(f"{self.log_file}.3").exists(), "Backup .3 should not exist (exceeds max_files)")

    def test_single_file_truncates_on_rotation(self):
        handler = RotatingFileHandler(str(self.log_file), max_bytes=40, max_files=1)

        for i in range(10):
            handler.write(f"Log message {i} with content to fill up space\n")

        handler.close()

        self.assertFalse(Path(f"{self.log_file}.1").exists())
        self.assertEqual(self.log_file.read_text(encoding="utf-8"), "Log message 9 with content to fill up space\n")

    def test_newest_backup_holds_most_recent_lines(self):
        handler = RotatingFileHandler(str(self.log_file), max_bytes=10, max_files=3)

        for line in ("first line\n", "second line\n", "third line\n"):
            handler.write(line)

        handler.close()

        self.assertEqual(self.log_file.read_text(encoding="utf-8"), "third line\n")
        self.assertEqual(Path(f"{self.log_file}.1").read_text(encoding="utf-8"), "second line\n")
        self.assertEqual(Path(f"{self.log_file}.2").read_text(encoding="utf-8"), "first line\n")

    def test_flush(self):
        handler = RotatingFileHandler(str(self.log_file))

        handler.write("Test message\n")
        handler.flush()

        content = self.log_file.read_text(encoding="utf-8")
        self.assertIn("Test message", content)

        handler.close()

    def test_unicode_content(self):
        handler = RotatingFileHandler(str(self.log_file))

        handler.write("Message with émojis: 🎉 ✅ 🚀\n")
        handler.write("Chinese: 你好世界\n")

        handler.close()

        content = self.log_file.read_text(encoding="utf-8")
        self.assertIn("🎉", content)
        self.assertIn("你好世界", content)

    def test_close_multiple_times(self):
        handler = RotatingFileHandler(str(self.log_file))
        handler.write("Test\n")

        handler.close()
        handler.close()

    def test_write_after_close_reopens(self):
        handler = RotatingFileHandler(str(self.log_file))
        handler.write("one\n")
        handler.close()

        handler.write("two\n")
        handler.close()

        self.assertEqual(self.log_file.read_text(encoding="utf-8"), "one\ntwo\n")


if __name__ == "__main__":
    unittest.main()
