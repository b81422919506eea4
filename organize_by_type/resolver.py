"""
Destination resolver: picks a collision-free path inside a bucket folder.
"""

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path

from .errors import DestinationExhausted

logger = logging.getLogger(__name__)

MAX_COLLISION_ATTEMPTS = 100000


@dataclass(frozen=True)
class Resolution:
    path: Path
    renamed: bool


class DestinationResolver:
    """
    Resolves target_dir/filename to a path nobody else has.

    A path is taken if it exists on disk (broken symlinks included) or was
    already handed out earlier in this run. The second check keeps dry runs
    accurate, since nothing is moved there, and guarantees that no two
    sources of one run ever share a destination.
    """

    def __init__(self, dry_run: bool = False, max_attempts: int = MAX_COLLISION_ATTEMPTS):
        self.dry_run = dry_run
        self.max_attempts = max_attempts
        self._claimed: set[Path] = set()
        self._lock = threading.Lock()

    def _taken(self, path: Path) -> bool:
        return path in self._claimed or os.path.lexists(path)

    def resolve(self, target_dir: Path, filename: str) -> Resolution:
        """
        Return the final destination for filename inside target_dir.

        If target_dir/filename is free it is used as is. Otherwise a counter
        is appended to the stem (report_1.pdf, report_2.pdf, ...) and every
        candidate is checked again; the first free one wins.

        Args:
            target_dir: Bucket folder. Created if missing, unless dry-run.
            filename: Desired file name.

        Returns:
            Resolution with the chosen path and whether it was renamed.

        Raises:
            DestinationExhausted: If no free name is found within max_attempts.
            OSError: If target_dir cannot be created.
        """
        if not self.dry_run:
            target_dir.mkdir(parents=True, exist_ok=True)

        with self._lock:
            candidate = target_dir / filename
            if not self._taken(candidate):
                self._claimed.add(candidate)
                return Resolution(candidate, renamed=False)

            stem = Path(filename).stem
            suffix = Path(filename).suffix
            for counter in range(1, self.max_attempts + 1):
                candidate = target_dir / f"{stem}_{counter}{suffix}"
                if not self._taken(candidate):
                    self._claimed.add(candidate)
                    logger.debug("Name collision for %s, using %s", filename, candidate.name)
                    return Resolution(candidate, renamed=True)

        raise DestinationExhausted(target_dir, filename, self.max_attempts)
