import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from organize_by_type.audit import AuditWriter, read_audit_list
from organize_by_type.models import MoveKind, MoveRecord


class TestAuditWriter(unittest.TestCase):
    def test_header_and_lines(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            out = Path(tmpdir) / "backup.txt"
            root = Path("/data")

            with AuditWriter(out, root, datetime(2025, 1, 23, 14, 5, 9)) as audit:
                audit.write(MoveRecord(root / "a.txt", root / "FILE_TYPE_TXT" / "a.txt", MoveKind.UNIQUE))
                audit.write(MoveRecord(root / "b.txt", root / "DUPLICATES_TXT" / "b.txt", MoveKind.DUPLICATE))

            lines = out.read_text(encoding="utf-8").splitlines()

            self.assertEqual(lines[0], "# Organize by Type - Backup List")
            self.assertTrue(lines[1].startswith("# Date: Thu Jan 23 14:05:09 2025"))
            self.assertEqual(lines[2], "# Directory: /data")
            self.assertEqual(lines[3], "# Format: SOURCE -> DESTINATION")
            self.assertEqual(lines[4], "")
            self.assertEqual(lines[5], "/data/a.txt -> /data/FILE_TYPE_TXT/a.txt")
            self.assertEqual(lines[6], "/data/b.txt -> /data/DUPLICATES_TXT/b.txt (DUPLICATE)")
            self.assertEqual(audit.count, 2)

    def test_lines_are_flushed_immediately(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            out = Path(tmpdir) / "backup.txt"
            audit = AuditWriter(out, Path("/data"))
            audit.open()
            try:
                audit.write(MoveRecord(Path("/data/a.txt"), Path("/data/FILE_TYPE_TXT/a.txt"), MoveKind.UNIQUE))
                # Readable before close, as after a crash
                self.assertIn("/data/a.txt -> /data/FILE_TYPE_TXT/a.txt", out.read_text(encoding="utf-8"))
            finally:
                audit.close()

    def test_read_audit_list(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            out = Path(tmpdir) / "backup.txt"
            with AuditWriter(out, Path("/data")) as audit:
                audit.write(MoveRecord(Path("/data/x y.txt"), Path("/data/FILE_TYPE_TXT/x y.txt"), MoveKind.UNIQUE))
                audit.write(MoveRecord(Path("/data/z.txt"), Path("/data/DUPLICATES_TXT/z.txt"), MoveKind.DUPLICATE))

            self.assertEqual(read_audit_list(out), [
                ("/data/x y.txt", "/data/FILE_TYPE_TXT/x y.txt", False),
                ("/data/z.txt", "/data/DUPLICATES_TXT/z.txt", True),
            ])

    def test_write_requires_open(self):
        audit = AuditWriter(Path("unused.txt"), Path("/data"))
        with self.assertRaises(RuntimeError):
            audit.write(MoveRecord(Path("/a"), Path("/b"), MoveKind.UNIQUE))


if __name__ == '__main__':
    unittest.main()
