"""
Error types for the Organize by Type tool.

Filter skips are not errors; they are reported as SkipReason values.
"""


class OrganizeError(Exception):
    """Base error for the project."""


class ConfigError(OrganizeError):
    """Invalid configuration value."""


class DirectoryNotFound(OrganizeError):
    """The directory to organize does not exist or is not a directory."""

    def __init__(self, path):
        super().__init__(f"Directory not found: {path}")
        self.path = path


class HashError(OrganizeError):
    """A file could not be read to compute its content digest."""

    def __init__(self, path, reason: str):
        super().__init__(f"Failed to calculate hash for {path}: {reason}")
        self.path = path
        self.reason = reason


class MoveError(OrganizeError):
    """A file could not be relocated. The source is left where it was."""

    def __init__(self, source, destination, reason: str):
        super().__init__(f"Failed to move {source} -> {destination}: {reason}")
        self.source = source
        self.destination = destination
        self.reason = reason


class DestinationExhausted(MoveError):
    """No free collision-suffixed name was found within the attempt limit."""

    def __init__(self, target_dir, filename: str, attempts: int):
        OrganizeError.__init__(
            self,
            f"No free name for {filename} in {target_dir} after {attempts} attempts",
        )
        self.source = None
        self.destination = target_dir / filename
        self.reason = "collision limit reached"
        self.attempts = attempts
