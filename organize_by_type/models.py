"""
Data types shared by the organizing pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping


class SkipReason(str, Enum):
    """Why the path filter left a file in place."""
    HIDDEN = "hidden"
    ALREADY_ORGANIZED = "already-organized"
    IGNORED_FOLDER = "ignored-folder"
    NO_EXTENSION = "no-extension"
    EXCLUDED_EXTENSION = "excluded-extension"
    NOT_INCLUDED = "not-included"
    TOO_SMALL = "too-small"
    TOO_LARGE = "too-large"


class Outcome(str, Enum):
    UNIQUE = "unique"
    DUPLICATE = "duplicate"
    SKIPPED = "skipped"
    ERROR = "error"


class MoveKind(str, Enum):
    UNIQUE = "unique"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class FileCandidate:
    """
    A discovered file and the attributes the filter needs.

    ext is the uppercased extension, or None when the name has none.
    top_folder is the first path component below the root, or None for
    files that sit directly in the root.
    """
    path: Path
    name: str
    ext: str | None
    size: int
    top_folder: str | None


@dataclass(frozen=True)
class DedupKey:
    """Same extension and same content digest means same file."""
    ext: str
    digest: str


@dataclass(frozen=True)
class MoveRecord:
    """One relocation (or, in a dry run, one planned relocation)."""
    source: Path
    destination: Path
    kind: MoveKind
    renamed: bool = False
    dry_run: bool = False

    @property
    def is_duplicate(self) -> bool:
        return self.kind is MoveKind.DUPLICATE

    @property
    def tag(self) -> str:
        """unique, duplicate, or renamed when a collision suffix was added."""
        if self.renamed:
            return "renamed"
        return self.kind.value

    def audit_line(self) -> str:
        line = f"{self.source} -> {self.destination}"
        if self.is_duplicate:
            line += " (DUPLICATE)"
        return line


@dataclass(frozen=True)
class FileEvent:
    """Per-file result handed to renderers and loggers."""
    path: Path
    outcome: Outcome
    size: int = 0
    reason: SkipReason | None = None
    record: MoveRecord | None = None
    canonical: Path | None = None
    error: Exception | None = None


@dataclass(frozen=True)
class RunStatistics:
    unique: int = 0
    duplicate: int = 0
    skipped: int = 0
    errors: int = 0
    bytes_moved: int = 0
    skipped_by_reason: Mapping[SkipReason, int] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def total_processed(self) -> int:
        return self.unique + self.duplicate
