#!/usr/bin/env python3
"""
Organize by Type - CLI Entry Point
==================================

Usage:
    python -m organize_by_type                     # organize the current directory
    python -m organize_by_type ~/Downloads --dry-run
    python -m organize_by_type ~/Photos --include jpg,png,gif,jpeg
    python -m organize_by_type ~/Documents --max-size 104857600 -y

Every option can also be set through the environment or a .env file
(DRY_RUN=true, INCLUDE_EXTENSIONS=jpg,png, USE_TIMESTAMP=true, ...).
Command-line flags win over the environment.
"""

import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from .audit import AuditWriter
from .config import RunConfig, load_config
from .errors import ConfigError, DirectoryNotFound
from .hasher import HASH_ALGORITHMS
from .log import setup_logging, shutdown_logging
from .models import FileEvent, Outcome
from .organizer import open_run, run
from .scanner import summarize_tree
from .utils import (
    console,
    format_size,
    print_error,
    print_header,
    print_preview,
    print_statistics,
    print_success,
    print_warning,
    set_colors,
)

logger = logging.getLogger("organize_by_type")


def render_event(event: FileEvent) -> str | None:
    """One console line per moved or failed file; skips are not shown."""
    if event.outcome is Outcome.ERROR:
        return f"[ERROR] {event.error}"

    record = event.record
    if record is None:
        return None

    renamed = " (renamed)" if record.renamed else ""
    if event.outcome is Outcome.DUPLICATE:
        verb = f"Would move duplicate{renamed}" if record.dry_run else f"Duplicate{renamed}"
    else:
        verb = f"Would move{renamed}" if record.dry_run else f"Moved{renamed}"
    return f"{verb}: {record.source} → {record.destination}"


def print_config(config: RunConfig):
    """Show the options that differ from 'process everything'."""
    console.print("[cyan]Active Configuration:[/cyan]")
    if config.include_extensions:
        console.print(f"  Include extensions: {','.join(sorted(config.include_extensions))}")
    if config.exclude_extensions:
        console.print(f"  Exclude extensions: {','.join(sorted(config.exclude_extensions))}")
    if config.min_file_size > 0:
        console.print(f"  Min file size: {format_size(config.min_file_size)}")
    if config.max_file_size > 0:
        console.print(f"  Max file size: {format_size(config.max_file_size)}")
    console.print(f"  Max depth: {config.max_depth if config.max_depth is not None else 'unlimited'}")
    console.print(f"  Hash algorithm: {config.hash_algorithm.upper()}")
    logging_state = f"Enabled → {config.log_path}" if config.enable_logging else "Disabled"
    console.print(f"  Logging: {logging_state}")
    console.print()


def confirm() -> bool:
    """Ask before touching anything. Non-interactive stdin counts as yes."""
    if not sys.stdin.isatty():
        print_warning("Non-interactive mode detected. Auto-approving.")
        return True

    response = input("Do you want to proceed? (yes/no): ").strip().lower()
    return response in ("yes", "y")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="organize-by-type",
        description="Organize files into FILE_TYPE_<EXT> folders and move content duplicates "
                    "into DUPLICATES_<EXT> folders. Nothing is ever deleted.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("root", type=Path, nargs="?", default=Path("."),
                        help="Directory to organize (default: current directory)")
    parser.add_argument("--dry-run", action="store_true", default=None,
                        help="Simulate without moving files")
    parser.add_argument("-y", "--yes", dest="skip_confirmation", action="store_true", default=None,
                        help="Skip the confirmation prompt")
    parser.add_argument("--include", dest="include_extensions", metavar="EXTS",
                        help="Only process these extensions (comma-separated)")
    parser.add_argument("--exclude", dest="exclude_extensions", metavar="EXTS",
                        help="Never process these extensions (comma-separated)")
    parser.add_argument("--min-size", dest="min_file_size", type=int, metavar="BYTES",
                        help="Skip files smaller than N bytes (0 = no limit)")
    parser.add_argument("--max-size", dest="max_file_size", type=int, metavar="BYTES",
                        help="Skip files larger than N bytes (0 = no limit)")
    parser.add_argument("--max-depth", type=int, metavar="N",
                        help="Maximum folder depth to scan (files in ROOT are depth 1)")
    parser.add_argument("--ignore-folders", dest="ignored_folders", metavar="NAMES",
                        help="Top-level folders to leave alone (comma-separated, case-insensitive)")
    parser.add_argument("--use-timestamp", action="store_true", default=None,
                        help="Append the date to bucket folder names")
    parser.add_argument("--date-format", metavar="FMT",
                        help="strftime format for --use-timestamp (default: %%Y%%m%%d)")
    parser.add_argument("--unique-prefix", metavar="PREFIX",
                        help="Prefix for unique file folders (default: FILE_TYPE)")
    parser.add_argument("--duplicate-prefix", metavar="PREFIX",
                        help="Prefix for duplicate file folders (default: DUPLICATES)")
    parser.add_argument("--hash", dest="hash_algorithm", choices=sorted(HASH_ALGORITHMS),
                        help="Content hash algorithm (default: sha256)")
    parser.add_argument("--log-dir", type=Path, metavar="DIR",
                        help="Where to write the log file and backup list (default: .)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Log level (default: INFO)")
    parser.add_argument("--no-log", dest="enable_logging", action="store_false", default=None,
                        help="Do not write a log file")
    parser.add_argument("--no-backup-list", dest="create_backup_list", action="store_false", default=None,
                        help="Do not write the SOURCE -> DESTINATION backup list")
    parser.add_argument("-q", "--quiet", dest="verbose", action="store_false", default=None,
                        help="Do not print a line per file")
    parser.add_argument("--no-color", dest="show_colors", action="store_false", default=None,
                        help="Disable colored output")
    parser.add_argument("--no-stats", dest="show_statistics", action="store_false", default=None,
                        help="Do not print statistics at the end")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {k: v for k, v in vars(args).items() if k != "root"}
    try:
        config = load_config(overrides)
    except ConfigError as e:
        print_error(str(e))
        return 1

    set_colors(config.show_colors)

    try:
        context = open_run(args.root, config)
    except DirectoryNotFound as e:
        print_error(str(e))
        return 1

    log_path = setup_logging(config, console)
    try:
        return _run(context, config, log_path)
    except KeyboardInterrupt:
        console.print("\n[bold red][ABORT] Operation cancelled by user[/bold red]")
        logger.warning("Aborted by user; the file in progress may need re-checking")
        return 130
    finally:
        shutdown_logging()


def _run(context, config: RunConfig, log_path: Path | None) -> int:
    mode = "DRY RUN (simulation only, no files will be moved)" if config.dry_run else "Organize"
    print_header("ORGANIZE BY TYPE - PREVIEW", f"Path: {context.root}\nMode: {mode}")
    print_config(config)

    with console.status("[bold green]Analyzing directory...[/bold green]"):
        summary = summarize_tree(context.root, config, exclude=context.own_files)
    print_preview(summary)
    console.print()

    if not config.skip_confirmation and not confirm():
        console.print("[bold red]Operation cancelled.[/bold red]")
        logger.info("Operation cancelled by user")
        return 0

    if config.dry_run:
        console.print("[yellow]Starting DRY RUN (simulation)...[/yellow]\n")
    else:
        console.print("[green]Starting organization...[/green]\n")

    audit = None
    if config.create_backup_list and not config.dry_run:
        audit = AuditWriter(config.backup_list_path, context.root, context.started_at)
        audit.open()
        logger.info("Backup list created: %s", audit.path)

    try:
        with tqdm(unit="file", disable=not config.verbose) as pbar:
            def on_event(event: FileEvent):
                pbar.update(1)
                if config.verbose:
                    line = render_event(event)
                    if line:
                        tqdm.write(line)

            report = run(context.root, config, on_event=on_event, audit=audit, context=context)
    finally:
        if audit is not None:
            audit.close()

    console.print()
    print_success("Done organizing by type with duplicate detection!")
    if config.show_statistics:
        print_statistics(report.statistics)
    if log_path is not None:
        console.print(f"[blue]Log file saved:[/blue] {log_path}")
    if audit is not None:
        console.print(f"[blue]Backup list saved:[/blue] {audit.path} ({audit.count} moves)")
    if config.dry_run:
        print_warning("This was a DRY-RUN. No files were actually moved.")

    logger.info("Operation completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
