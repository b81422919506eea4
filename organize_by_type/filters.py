"""
Path filter: decides whether a discovered file is processed at all.

Pure predicate. The result is a SkipReason (or None when eligible) so that
each rule stays independently visible in statistics and logs.
"""

from .config import RunConfig
from .models import FileCandidate, SkipReason


def is_organized_folder(folder: str | None, config: RunConfig) -> bool:
    """True for FILE_TYPE_* / DUPLICATES_* style bucket folders."""
    if not folder:
        return False
    return folder.startswith(f"{config.unique_prefix}_") or folder.startswith(f"{config.duplicate_prefix}_")


def is_folder_ignored(folder: str | None, config: RunConfig) -> bool:
    if not folder:
        return False
    return folder.upper() in config.ignored_folders


def check_candidate(candidate: FileCandidate, config: RunConfig) -> SkipReason | None:
    """
    Apply the filter rules in order; the first match wins.

    Args:
        candidate: The file to check.
        config: Run configuration (extension sets are already uppercased).

    Returns:
        None if the file is eligible, otherwise the reason it is skipped.
    """
    if candidate.name.startswith("."):
        return SkipReason.HIDDEN

    if is_organized_folder(candidate.top_folder, config):
        return SkipReason.ALREADY_ORGANIZED

    if is_folder_ignored(candidate.top_folder, config):
        return SkipReason.IGNORED_FOLDER

    if not candidate.ext:
        return SkipReason.NO_EXTENSION

    # Exclude wins over include
    if candidate.ext in config.exclude_extensions:
        return SkipReason.EXCLUDED_EXTENSION

    if config.include_extensions and candidate.ext not in config.include_extensions:
        return SkipReason.NOT_INCLUDED

    if config.min_file_size > 0 and candidate.size < config.min_file_size:
        return SkipReason.TOO_SMALL

    if config.max_file_size > 0 and candidate.size > config.max_file_size:
        return SkipReason.TOO_LARGE

    return None
