"""
Directory scanning.

Walks the tree to organize, turns paths into FileCandidates, and builds the
read-only summary shown before a run.
"""

import logging
import os
from collections import defaultdict
from pathlib import Path
from typing import Collection, Iterator

from .config import RunConfig
from .models import FileCandidate

logger = logging.getLogger(__name__)

NO_EXT_LABEL = "NO_EXT"


def split_extension(filename: str) -> str | None:
    """
    Uppercased extension after the last dot, or None.

    'photo.jpg' -> 'JPG', 'archive.tar.gz' -> 'GZ', 'README' -> None,
    'notes.' -> None.
    """
    if "." not in filename:
        return None
    ext = filename.rsplit(".", 1)[1]
    return ext.upper() or None


def _log_walk_error(error: OSError) -> None:
    logger.warning("Cannot read directory %s: %s", error.filename, error.strerror or error)


def walk_files(root: Path, max_depth: int | None = None) -> Iterator[Path]:
    """
    Yield regular files under root in os.walk order.

    Order inside a directory is whatever the filesystem returns; it is not
    sorted and may differ between filesystems. Symlinks are neither followed
    nor yielded.

    Args:
        root: Directory to walk.
        max_depth: Like find -maxdepth: files directly in root have depth 1.
            None means unlimited.

    Yields:
        File paths.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        current = Path(dirpath)
        depth = len(current.relative_to(root).parts) + 1

        if max_depth is not None and depth >= max_depth:
            dirnames[:] = []
        if max_depth is not None and depth > max_depth:
            continue

        for filename in filenames:
            filepath = current / filename
            if filepath.is_symlink() or not filepath.is_file():
                continue
            yield filepath


def build_candidate(root: Path, path: Path) -> FileCandidate:
    """
    Derive the attributes the filter needs.

    Raises:
        OSError: If the file cannot be stat'ed (for example it vanished).
    """
    parts = path.relative_to(root).parts
    stat = path.stat()

    return FileCandidate(
        path=path,
        name=path.name,
        ext=split_extension(path.name),
        size=stat.st_size,
        top_folder=parts[0] if len(parts) > 1 else None,
    )


def summarize_tree(root: Path, config: RunConfig, top_n: int = 20, exclude: Collection[Path] = ()) -> dict:
    """
    Build the pre-run summary of a directory. Touches nothing.

    Args:
        root: Directory to summarize.
        config: Supplies max_depth and the bucket naming.
        top_n: How many top-level folders to list.
        exclude: Resolved paths left out of the summary (the run's own log
            file and backup list).

    Returns:
        Dict with total_files, total_size_bytes, extension_histogram (hidden
        files excluded), folders (largest first) and example bucket names.
    """
    root = root.resolve()

    total_files = 0
    total_size = 0
    ext_counts: dict[str, int] = defaultdict(int)
    folder_sizes: dict[str, int] = defaultdict(int)

    for path in walk_files(root, config.max_depth):
        if path in exclude:
            continue
        try:
            size = path.stat().st_size
        except OSError:
            continue

        total_size += size
        parts = path.relative_to(root).parts
        if len(parts) > 1:
            folder_sizes[parts[0]] += size

        if path.name.startswith("."):
            continue
        total_files += 1
        ext_counts[split_extension(path.name) or NO_EXT_LABEL] += 1

    folders = sorted(folder_sizes.items(), key=lambda x: -x[1])[:top_n]
    suffix = config.timestamp_suffix()

    return {
        "root": str(root),
        "total_files": total_files,
        "total_size_bytes": total_size,
        "extension_histogram": dict(sorted(ext_counts.items(), key=lambda x: -x[1])),
        "folders": [{"name": name, "total_size_bytes": size} for name, size in folders],
        "unique_bucket_example": config.unique_bucket("<EXT>", suffix),
        "duplicate_bucket_example": config.duplicate_bucket("<EXT>", suffix),
    }
