"""
Audit ("backup") list of completed moves.

One line per move, written and flushed as the move happens, so an
interrupted run still leaves an accurate record:

    /src/a.txt -> /src/FILE_TYPE_TXT/a.txt
    /src/b.txt -> /src/DUPLICATES_TXT/b.txt (DUPLICATE)
"""

from datetime import datetime
from pathlib import Path

from .models import MoveRecord


class AuditWriter:
    """Context manager that streams MoveRecords to a text file."""

    def __init__(self, path: Path, root: Path, started_at: datetime | None = None):
        self.path = Path(path)
        self.root = root
        self.started_at = started_at or datetime.now()
        self.count = 0
        self._handle = None

    def __enter__(self) -> "AuditWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = open(self.path, "w", encoding="utf-8")
        self._handle.write("# Organize by Type - Backup List\n")
        self._handle.write(f"# Date: {self.started_at.strftime('%a %b %d %H:%M:%S %Y')}\n")
        self._handle.write(f"# Directory: {self.root}\n")
        self._handle.write("# Format: SOURCE -> DESTINATION\n")
        self._handle.write("\n")
        self._handle.flush()

    def write(self, record: MoveRecord) -> None:
        if self._handle is None:
            raise RuntimeError("AuditWriter is not open")
        self._handle.write(record.audit_line() + "\n")
        self._handle.flush()
        self.count += 1

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None


def read_audit_list(path: Path) -> list[tuple[str, str, bool]]:
    """
    Parse an audit list back into (source, destination, is_duplicate) tuples.

    Header and blank lines are ignored.
    """
    entries = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\n")
            if not line or line.startswith("#"):
                continue
            duplicate = line.endswith(" (DUPLICATE)")
            if duplicate:
                line = line[: -len(" (DUPLICATE)")]
            source, _, destination = line.partition(" -> ")
            entries.append((source, destination, duplicate))
    return entries
