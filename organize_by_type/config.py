"""
Run configuration for the Organize by Type tool.

Values come from built-in defaults, then the environment (a .env file in
the working directory is loaded first), then explicit overrides from the
command line. Everything is parsed and validated once, up front.
"""

import os
from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError
from .hasher import DEFAULT_ALGORITHM, normalize_algorithm

DEFAULT_EXCLUDE_EXTENSIONS = "tmp,temp,log,bak,swp,swo"
DEFAULT_IGNORE_FOLDERS = "logs,cache,temp,.git,.svn,node_modules,vendor"
DEFAULT_UNIQUE_PREFIX = "FILE_TYPE"
DEFAULT_DUPLICATE_PREFIX = "DUPLICATES"
DEFAULT_DATE_FORMAT = "%Y%m%d"

# The shell version used 999 to mean "no limit"
UNLIMITED_DEPTH = 999

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off", ""}


def _stamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _default_log_filename() -> str:
    return f"organize_by_type_{_stamp()}.log"


def _default_backup_filename() -> str:
    return f"organize_backup_{_stamp()}.txt"


def parse_bool(value: Any, key: str = "value") -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{key}: expected true/false, got '{value}'")


def parse_int(value: Any, key: str = "value") -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key}: expected an integer, got '{value}'")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{key}: expected an integer, got '{value}'") from None


def parse_list(value: Any) -> list[str]:
    """Split a comma-separated string (or pass through an iterable)."""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    return [str(item).strip() for item in items if str(item).strip()]


def normalize_extensions(value: Any) -> frozenset[str]:
    """'jpg, .PNG' -> {'JPG', 'PNG'}"""
    return frozenset(item.lstrip(".").upper() for item in parse_list(value) if item.lstrip("."))


def normalize_folders(value: Any) -> frozenset[str]:
    """Folder names are compared case-insensitively, so store them uppercased."""
    return frozenset(item.upper() for item in parse_list(value))


@dataclass(frozen=True)
class RunConfig:
    """
    Immutable configuration for one invocation.

    Extension and folder sets are stored uppercased. Size bounds of 0 and a
    max_depth of None mean unbounded.
    """
    include_extensions: frozenset[str] = frozenset()
    exclude_extensions: frozenset[str] = normalize_extensions(DEFAULT_EXCLUDE_EXTENSIONS)
    min_file_size: int = 0
    max_file_size: int = 0
    ignored_folders: frozenset[str] = normalize_folders(DEFAULT_IGNORE_FOLDERS)
    max_depth: int | None = None
    unique_prefix: str = DEFAULT_UNIQUE_PREFIX
    duplicate_prefix: str = DEFAULT_DUPLICATE_PREFIX
    use_timestamp: bool = False
    date_format: str = DEFAULT_DATE_FORMAT
    hash_algorithm: str = DEFAULT_ALGORITHM
    dry_run: bool = False
    skip_confirmation: bool = False

    # Output options
    enable_logging: bool = True
    log_dir: Path = Path(".")
    log_filename: str = field(default_factory=_default_log_filename)
    log_level: str = "INFO"
    verbose: bool = True
    show_colors: bool = True
    show_statistics: bool = True
    create_backup_list: bool = True
    backup_list_file: str = field(default_factory=_default_backup_filename)

    def __post_init__(self):
        def set_(name, value):
            object.__setattr__(self, name, value)

        set_("include_extensions", normalize_extensions(self.include_extensions))
        set_("exclude_extensions", normalize_extensions(self.exclude_extensions))
        set_("ignored_folders", normalize_folders(self.ignored_folders))
        set_("hash_algorithm", normalize_algorithm(self.hash_algorithm))
        set_("log_dir", Path(self.log_dir))

        level = str(self.log_level).strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in LOG_LEVELS:
            raise ConfigError(f"log_level: expected one of {', '.join(LOG_LEVELS)}, got '{self.log_level}'")
        set_("log_level", level)

        for name in ("min_file_size", "max_file_size"):
            value = parse_int(getattr(self, name), name)
            if value < 0:
                raise ConfigError(f"{name}: must be 0 (no limit) or positive, got {value}")
            set_(name, value)
        if self.min_file_size and self.max_file_size and self.min_file_size > self.max_file_size:
            raise ConfigError(
                f"min_file_size ({self.min_file_size}) is larger than max_file_size ({self.max_file_size})"
            )

        if self.max_depth is not None:
            depth = parse_int(self.max_depth, "max_depth")
            set_("max_depth", None if depth <= 0 or depth >= UNLIMITED_DEPTH else depth)

        for name in ("unique_prefix", "duplicate_prefix"):
            prefix = str(getattr(self, name)).strip()
            if not prefix or "/" in prefix or os.sep in prefix:
                raise ConfigError(f"{name}: must be a non-empty folder name, got '{getattr(self, name)}'")
            set_(name, prefix)
        if self.unique_prefix == self.duplicate_prefix:
            raise ConfigError("unique_prefix and duplicate_prefix must differ")

        if not self.date_format:
            raise ConfigError("date_format must not be empty")

    def timestamp_suffix(self, now: datetime | None = None) -> str:
        """Suffix for bucket names, fixed once per run."""
        if not self.use_timestamp:
            return ""
        return "_" + (now or datetime.now()).strftime(self.date_format)

    def unique_bucket(self, ext: str, suffix: str = "") -> str:
        return f"{self.unique_prefix}_{ext}{suffix}"

    def duplicate_bucket(self, ext: str, suffix: str = "") -> str:
        return f"{self.duplicate_prefix}_{ext}{suffix}"

    @property
    def log_path(self) -> Path:
        return self.log_dir / self.log_filename

    @property
    def backup_list_path(self) -> Path:
        return self.log_dir / self.backup_list_file


# Environment key -> (RunConfig field, parser)
ENV_KEYS = {
    "INCLUDE_EXTENSIONS": ("include_extensions", str),
    "EXCLUDE_EXTENSIONS": ("exclude_extensions", str),
    "MIN_FILE_SIZE": ("min_file_size", parse_int),
    "MAX_FILE_SIZE": ("max_file_size", parse_int),
    "USE_TIMESTAMP": ("use_timestamp", parse_bool),
    "DATE_FORMAT": ("date_format", str),
    "FOLDER_PREFIX": ("unique_prefix", str),
    "DUPLICATES_PREFIX": ("duplicate_prefix", str),
    "DEFAULT_IGNORE_FOLDERS": ("ignored_folders", str),
    "IGNORE_FOLDERS": ("ignored_folders", str),
    "MAX_DEPTH": ("max_depth", parse_int),
    "SKIP_CONFIRMATION": ("skip_confirmation", parse_bool),
    "DRY_RUN": ("dry_run", parse_bool),
    "HASH_ALGORITHM": ("hash_algorithm", str),
    "ENABLE_LOGGING": ("enable_logging", parse_bool),
    "LOG_DIR": ("log_dir", Path),
    "LOG_FILENAME": ("log_filename", str),
    "LOG_LEVEL": ("log_level", str),
    "VERBOSE": ("verbose", parse_bool),
    "SHOW_COLORS": ("show_colors", parse_bool),
    "SHOW_STATISTICS": ("show_statistics", parse_bool),
    "CREATE_BACKUP_LIST": ("create_backup_list", parse_bool),
    "BACKUP_LIST_FILE": ("backup_list_file", str),
}


def config_from_env(env: Mapping[str, str]) -> dict[str, Any]:
    """
    Pick recognized keys out of an environment mapping.

    Args:
        env: Mapping such as os.environ.

    Returns:
        Dict of RunConfig field name -> parsed value.

    Raises:
        ConfigError: If a value cannot be parsed.
    """
    values: dict[str, Any] = {}
    for key, (name, parser) in ENV_KEYS.items():
        raw = env.get(key)
        if raw is None:
            continue
        if parser in (parse_int, parse_bool):
            values[name] = parser(raw, key)
        else:
            values[name] = parser(raw)
    return values


def load_config(
    overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
    dotenv_path: Path | None = None,
) -> RunConfig:
    """
    Build the RunConfig for this invocation.

    Args:
        overrides: Field values from the command line; None entries are ignored.
        env: Environment mapping. Defaults to os.environ after loading .env.
        dotenv_path: Explicit .env file to load instead of searching for one.

    Returns:
        A validated RunConfig.
    """
    if env is None:
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        env = os.environ

    values = config_from_env(env)

    known = {f.name for f in fields(RunConfig)}
    for name, value in (overrides or {}).items():
        if name not in known:
            raise ConfigError(f"Unknown option: {name}")
        if value is not None:
            values[name] = value

    return RunConfig(**values)
