import errno
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from organize_by_type.errors import MoveError
from organize_by_type.models import MoveKind
from organize_by_type.mover import relocate


class TestMover(unittest.TestCase):
    def test_move_preserves_content_and_metadata(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            src = root / "a.txt"
            src.write_text("payload")
            os.chmod(src, 0o640)
            os.utime(src, (1_600_000_000, 1_600_000_000))
            dst = root / "FILE_TYPE_TXT" / "a.txt"
            dst.parent.mkdir()

            record = relocate(src, dst)

            self.assertFalse(src.exists())
            self.assertEqual(dst.read_text(), "payload")
            self.assertEqual(dst.stat().st_mode & 0o777, 0o640)
            self.assertEqual(int(dst.stat().st_mtime), 1_600_000_000)
            self.assertEqual(record.source, src)
            self.assertEqual(record.destination, dst)
            self.assertEqual(record.tag, "unique")

    def test_dry_run_touches_nothing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            src = root / "a.txt"
            src.write_text("payload")
            dst = root / "DUPLICATES_TXT" / "a.txt"

            record = relocate(src, dst, MoveKind.DUPLICATE, dry_run=True)

            self.assertTrue(src.exists())
            self.assertFalse(dst.parent.exists())
            self.assertTrue(record.dry_run)
            self.assertTrue(record.is_duplicate)

    def test_destination_appeared_after_resolution(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            src = root / "a.txt"
            src.write_text("mine")
            dst = root / "b.txt"
            dst.write_text("someone else's")

            with self.assertRaises(MoveError):
                relocate(src, dst)

            self.assertEqual(src.read_text(), "mine")
            self.assertEqual(dst.read_text(), "someone else's")

    @patch("organize_by_type.mover.os.rename")
    def test_cross_device_rename_is_an_error(self, mock_rename):
        mock_rename.side_effect = OSError(errno.EXDEV, "Invalid cross-device link")
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            src = root / "a.txt"
            src.write_text("x")

            with self.assertRaises(MoveError) as cm:
                relocate(src, root / "elsewhere" / "a.txt")

            self.assertIn("different filesystems", cm.exception.reason)
            self.assertTrue(src.exists())

    @patch("organize_by_type.mover.os.rename")
    def test_permission_denied(self, mock_rename):
        mock_rename.side_effect = PermissionError(errno.EACCES, "Permission denied")
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "a.txt"
            src.write_text("x")
            with self.assertRaises(MoveError) as cm:
                relocate(src, Path(tmpdir) / "b.txt")
            self.assertEqual(cm.exception.reason, "permission denied")

    def test_audit_line_and_tags(self):
        from organize_by_type.models import MoveRecord

        unique = MoveRecord(Path("/r/a.txt"), Path("/r/FILE_TYPE_TXT/a.txt"), MoveKind.UNIQUE)
        dup = MoveRecord(Path("/r/b.txt"), Path("/r/DUPLICATES_TXT/b_1.txt"), MoveKind.DUPLICATE, renamed=True)

        self.assertEqual(unique.audit_line(), "/r/a.txt -> /r/FILE_TYPE_TXT/a.txt")
        self.assertEqual(dup.audit_line(), "/r/b.txt -> /r/DUPLICATES_TXT/b_1.txt (DUPLICATE)")
        self.assertEqual(dup.tag, "renamed")


if __name__ == '__main__':
    unittest.main()
