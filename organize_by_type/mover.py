"""
Mover: relocates one file with a single rename.

os.rename keeps permission bits and timestamps because the inode itself is
not touched. It refuses to cross filesystems, which is reported as an error
instead of silently falling back to copy + delete.
"""

import errno
import os
from pathlib import Path

from .errors import MoveError
from .models import MoveKind, MoveRecord


def _describe(e: OSError) -> str:
    if e.errno == errno.EXDEV:
        return "source and destination are on different filesystems"
    if isinstance(e, PermissionError):
        return "permission denied"
    if isinstance(e, FileNotFoundError):
        return "source not found"
    if isinstance(e, FileExistsError):
        return "destination exists (race condition)"
    return e.strerror or str(e)


def relocate(
    source: Path,
    destination: Path,
    kind: MoveKind = MoveKind.UNIQUE,
    renamed: bool = False,
    dry_run: bool = False,
) -> MoveRecord:
    """
    Move source to destination, or only describe the move in a dry run.

    Args:
        source: File to move.
        destination: Final path from the destination resolver.
        kind: Whether the file is a unique or duplicate copy.
        renamed: Whether the resolver added a collision suffix.
        dry_run: If True, touch nothing.

    Returns:
        The MoveRecord for the audit trail.

    Raises:
        MoveError: If the rename fails. The source stays where it was.
    """
    record = MoveRecord(source, destination, kind, renamed=renamed, dry_run=dry_run)
    if dry_run:
        return record

    # Resolution and move are separate steps; something may have appeared since
    if os.path.lexists(destination):
        raise MoveError(source, destination, "destination exists (race condition)")

    try:
        os.rename(source, destination)
    except OSError as e:
        raise MoveError(source, destination, _describe(e)) from e

    return record
