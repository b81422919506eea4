"""
Organize by Type
================

Sorts the files of a directory tree into FILE_TYPE_<EXT> folders and moves
content-identical copies into DUPLICATES_<EXT> folders. Files are only ever
moved, never deleted.
"""

__version__ = "1.0.0"

from .config import RunConfig, load_config
from .errors import (
    ConfigError,
    DestinationExhausted,
    DirectoryNotFound,
    HashError,
    MoveError,
    OrganizeError,
)
from .models import FileEvent, MoveRecord, Outcome, RunStatistics, SkipReason
from .organizer import RunReport, open_run, organize, run

__all__ = [
    "RunConfig",
    "load_config",
    "ConfigError",
    "DestinationExhausted",
    "DirectoryNotFound",
    "HashError",
    "MoveError",
    "OrganizeError",
    "FileEvent",
    "MoveRecord",
    "Outcome",
    "RunStatistics",
    "SkipReason",
    "RunReport",
    "open_run",
    "organize",
    "run",
]
