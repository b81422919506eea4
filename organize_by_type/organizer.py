"""
The organizing pass.

Each file goes through filter -> hash -> ledger -> resolver -> mover, one at
a time, to completion before the next one starts. All state for a run lives
in a RunContext; nothing is kept between runs.

Which of several identical files ends up as the canonical (unique) copy is
decided by traversal order, i.e. os.walk order, which depends on the
filesystem and is not guaranteed to be stable.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator

from .audit import AuditWriter
from .config import RunConfig
from .errors import DirectoryNotFound, HashError, MoveError
from .filters import check_candidate
from .hasher import digest
from .log import FILE_EVENT
from .ledger import DedupLedger
from .models import DedupKey, FileEvent, MoveKind, MoveRecord, Outcome, RunStatistics, SkipReason
from .mover import relocate
from .resolver import DestinationResolver, Resolution
from .scanner import build_candidate, walk_files
from .stats import StatisticsCollector
from .utils import format_size

logger = logging.getLogger(__name__)

SKIP_MESSAGES = {
    SkipReason.HIDDEN: "Skipped hidden file",
    SkipReason.ALREADY_ORGANIZED: "Skipped file in organized folder",
    SkipReason.IGNORED_FOLDER: "Skipped file in ignored folder",
    SkipReason.NO_EXTENSION: "Skipped file without extension",
    SkipReason.EXCLUDED_EXTENSION: "Skipped excluded extension",
    SkipReason.NOT_INCLUDED: "Skipped extension not in include list",
    SkipReason.TOO_SMALL: "Skipped file below minimum size",
    SkipReason.TOO_LARGE: "Skipped file above maximum size",
}


@dataclass
class RunContext:
    """Everything one run owns. Discarded when the run ends."""
    root: Path
    config: RunConfig
    started_at: datetime = field(default_factory=datetime.now)
    ledger: DedupLedger = field(default_factory=DedupLedger)
    stats: StatisticsCollector = field(default_factory=StatisticsCollector)
    records: list[MoveRecord] = field(default_factory=list)
    moved_to: set[Path] = field(default_factory=set)
    resolver: DestinationResolver | None = None
    bucket_suffix: str = ""
    # The run's own log file and backup list; they may sit inside root
    own_files: frozenset[Path] = frozenset()

    def __post_init__(self):
        if self.resolver is None:
            self.resolver = DestinationResolver(dry_run=self.config.dry_run)
        self.bucket_suffix = self.config.timestamp_suffix(self.started_at)
        self.own_files = frozenset(
            p.resolve() for p in (self.config.log_path, self.config.backup_list_path)
        )


@dataclass(frozen=True)
class RunReport:
    root: Path
    dry_run: bool
    started_at: datetime
    finished_at: datetime
    records: tuple[MoveRecord, ...]
    statistics: RunStatistics


def open_run(root: Path, config: RunConfig) -> RunContext:
    """
    Check the target directory and create a fresh context.

    Raises:
        DirectoryNotFound: If root is missing or not a directory.
    """
    root = Path(root).expanduser()
    if not root.is_dir():
        raise DirectoryNotFound(root)
    return RunContext(root=root.resolve(), config=config)


def _error(ctx: RunContext, path: Path, error: Exception, size: int = 0) -> FileEvent:
    ctx.stats.record(Outcome.ERROR)
    logger.error(str(error), extra=FILE_EVENT)
    return FileEvent(path=path, outcome=Outcome.ERROR, size=size, error=error)


def process_file(ctx: RunContext, path: Path) -> FileEvent:
    """
    Run one file through the whole pipeline.

    Per-file failures are returned as ERROR events and counted; they never
    propagate, and the file stays where it was.

    Args:
        ctx: The run this file belongs to.
        path: File found by the traversal.

    Returns:
        The FileEvent describing what happened.
    """
    config = ctx.config

    try:
        candidate = build_candidate(ctx.root, path)
    except OSError as e:
        return _error(ctx, path, HashError(path, e.strerror or str(e)))

    reason = check_candidate(candidate, config)
    if reason is not None:
        ctx.stats.record(Outcome.SKIPPED, reason=reason)
        logger.debug("%s: %s", SKIP_MESSAGES[reason], path)
        return FileEvent(path=path, outcome=Outcome.SKIPPED, size=candidate.size, reason=reason)

    try:
        file_hash = digest(path, config.hash_algorithm)
    except HashError as e:
        return _error(ctx, path, e, candidate.size)

    key = DedupKey(candidate.ext, file_hash)
    unique_dir = ctx.root / config.unique_bucket(candidate.ext, ctx.bucket_suffix)
    target_dir = unique_dir
    claimed: list[Resolution] = []

    def claim_unique_slot() -> Path:
        claimed.append(ctx.resolver.resolve(unique_dir, candidate.name))
        return claimed[0].path

    # The key is registered before the move so a failed move still leaves
    # later copies pointed at the duplicate bucket
    try:
        entry = ctx.ledger.lookup_or_register(key, claim_unique_slot)
        if entry.first:
            kind = MoveKind.UNIQUE
            resolution = claimed[0]
        else:
            kind = MoveKind.DUPLICATE
            target_dir = ctx.root / config.duplicate_bucket(candidate.ext, ctx.bucket_suffix)
            resolution = ctx.resolver.resolve(target_dir, candidate.name)
    except MoveError as e:
        return _error(ctx, path, e, candidate.size)
    except OSError as e:
        return _error(ctx, path, MoveError(path, target_dir / candidate.name, e.strerror or str(e)), candidate.size)
    canonical = entry.destination

    try:
        record = relocate(path, resolution.path, kind, resolution.renamed, config.dry_run)
    except MoveError as e:
        return _error(ctx, path, e, candidate.size)

    ctx.records.append(record)
    ctx.moved_to.add(record.destination)
    outcome = Outcome.DUPLICATE if kind is MoveKind.DUPLICATE else Outcome.UNIQUE
    ctx.stats.record(outcome, size=candidate.size)

    verb = "Would move" if config.dry_run else "Moved"
    label = " duplicate" if kind is MoveKind.DUPLICATE else ""
    renamed = " (renamed)" if record.renamed else ""
    logger.info("%s%s%s: %s -> %s", verb, label, renamed, path, record.destination, extra=FILE_EVENT)

    return FileEvent(
        path=path,
        outcome=outcome,
        size=candidate.size,
        record=record,
        canonical=canonical,
    )


def organize(ctx: RunContext) -> Iterator[FileEvent]:
    """
    Yield one FileEvent per file under the root, in traversal order.

    Files this run has just moved into a bucket may be met again if that
    bucket already existed; they are not reported a second time. The run's
    own log file and backup list are never touched.
    """
    for path in walk_files(ctx.root, ctx.config.max_depth):
        if path in ctx.moved_to or path in ctx.own_files:
            continue
        yield process_file(ctx, path)


def run(
    root: Path,
    config: RunConfig,
    on_event: Callable[[FileEvent], None] | None = None,
    audit: AuditWriter | None = None,
    context: RunContext | None = None,
) -> RunReport:
    """
    Organize root and return the report.

    Args:
        root: Directory to organize.
        config: Run configuration.
        on_event: Called with every FileEvent as it happens.
        audit: Receives each completed real move.
        context: Pre-opened context (from open_run); created if omitted.

    Returns:
        RunReport with the move records and the final statistics.

    Raises:
        DirectoryNotFound: If root does not exist. Nothing is processed.
    """
    ctx = context or open_run(root, config)

    logger.info("Starting organize_by_type")
    logger.info("Target directory: %s", ctx.root)
    if config.dry_run:
        logger.info("Dry run: no files will be moved")

    for event in organize(ctx):
        if audit is not None and event.record is not None and not event.record.dry_run:
            audit.write(event.record)
        if on_event is not None:
            on_event(event)

    statistics = ctx.stats.snapshot()
    logger.info(
        "Statistics: Unique=%d, Duplicates=%d, Skipped=%d, Errors=%d",
        statistics.unique, statistics.duplicate, statistics.skipped, statistics.errors,
    )
    logger.info("Total size moved: %s", format_size(statistics.bytes_moved))

    return RunReport(
        root=ctx.root,
        dry_run=config.dry_run,
        started_at=ctx.started_at,
        finished_at=datetime.now(),
        records=tuple(ctx.records),
        statistics=statistics,
    )
