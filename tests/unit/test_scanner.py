import os
import tempfile
import unittest
from pathlib import Path

from organize_by_type.config import RunConfig
from organize_by_type.scanner import build_candidate, split_extension, summarize_tree, walk_files


class TestScanner(unittest.TestCase):
    def test_split_extension(self):
        self.assertEqual(split_extension("photo.jpg"), "JPG")
        self.assertEqual(split_extension("archive.tar.gz"), "GZ")
        self.assertEqual(split_extension("Makefile"), None)
        self.assertEqual(split_extension("notes."), None)
        self.assertEqual(split_extension(".bashrc"), "BASHRC")

    def test_build_candidate(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "docs").mkdir()
            path = root / "docs" / "Report.Pdf"
            path.write_bytes(b"x" * 42)

            candidate = build_candidate(root, path)

            self.assertEqual(candidate.name, "Report.Pdf")
            self.assertEqual(candidate.ext, "PDF")
            self.assertEqual(candidate.size, 42)
            self.assertEqual(candidate.top_folder, "docs")

    def test_build_candidate_in_root(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            path = root / "a.txt"
            path.write_text("x")
            self.assertIsNone(build_candidate(root, path).top_folder)

    def test_build_candidate_vanished(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(OSError):
                build_candidate(Path(tmpdir), Path(tmpdir) / "gone.txt")

    def test_walk_skips_symlinks_and_directories(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "real.txt").write_text("x")
            (root / "link.txt").symlink_to(root / "real.txt")
            (root / "sub").mkdir()
            (root / "sub" / "inner.txt").write_text("y")
            (root / "dirlink").symlink_to(root / "sub", target_is_directory=True)

            names = sorted(p.relative_to(root).as_posix() for p in walk_files(root))

            self.assertEqual(names, ["real.txt", "sub/inner.txt"])

    def test_walk_max_depth(self):
        """Depth counts like find -maxdepth: files in root are depth 1."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "a" / "b" / "c").mkdir(parents=True)
            (root / "one.txt").write_text("1")
            (root / "a" / "two.txt").write_text("2")
            (root / "a" / "b" / "three.txt").write_text("3")
            (root / "a" / "b" / "c" / "four.txt").write_text("4")

            def names(depth):
                return sorted(p.name for p in walk_files(root, depth))

            self.assertEqual(names(1), ["one.txt"])
            self.assertEqual(names(2), ["one.txt", "two.txt"])
            self.assertEqual(names(3), ["one.txt", "three.txt", "two.txt"])
            self.assertEqual(len(names(None)), 4)

    def test_summarize_tree(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "photos").mkdir()
            (root / "photos" / "a.jpg").write_bytes(b"x" * 300)
            (root / "photos" / "b.JPG").write_bytes(b"x" * 200)
            (root / "docs").mkdir()
            (root / "docs" / "c.pdf").write_bytes(b"x" * 100)
            (root / "README").write_bytes(b"x" * 10)
            (root / ".hidden").write_bytes(b"x" * 5)

            summary = summarize_tree(root, RunConfig())

            self.assertEqual(summary["total_files"], 4)
            self.assertEqual(summary["total_size_bytes"], 615)
            self.assertEqual(summary["extension_histogram"], {"JPG": 2, "PDF": 1, "NO_EXT": 1})
            self.assertEqual([f["name"] for f in summary["folders"]], ["photos", "docs"])
            self.assertEqual(summary["unique_bucket_example"], "FILE_TYPE_<EXT>")
            self.assertEqual(summary["duplicate_bucket_example"], "DUPLICATES_<EXT>")

            # Read-only: nothing moved, nothing created
            self.assertEqual(sorted(os.listdir(root)), [".hidden", "README", "docs", "photos"])

    def test_summarize_tree_exclude(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            (root / "a.txt").write_bytes(b"x" * 10)
            (root / "organize_backup.txt").write_bytes(b"x" * 90)

            summary = summarize_tree(root, RunConfig(), exclude={root / "organize_backup.txt"})

            self.assertEqual(summary["total_files"], 1)
            self.assertEqual(summary["total_size_bytes"], 10)


if __name__ == '__main__':
    unittest.main()
