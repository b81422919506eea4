"""
Content hashing.

Digests cover the file's bytes only, never its name or metadata.
"""

import hashlib
from pathlib import Path

from .errors import ConfigError, HashError

CHUNK_SIZE = 1024 * 1024

DEFAULT_ALGORITHM = "sha256"

# Accepted spellings -> hashlib name. The numeric forms match `shasum -a N`.
HASH_ALGORITHMS = {
    "sha1": "sha1",
    "1": "sha1",
    "sha-1": "sha1",
    "sha256": "sha256",
    "256": "sha256",
    "sha-256": "sha256",
    "sha512": "sha512",
    "512": "sha512",
    "sha-512": "sha512",
}


def normalize_algorithm(name: str) -> str:
    """
    Map a user-supplied algorithm name to its hashlib name.

    Raises:
        ConfigError: If the name is not a supported algorithm.
    """
    key = str(name).strip().lower()
    try:
        return HASH_ALGORITHMS[key]
    except KeyError:
        supported = ", ".join(sorted(set(HASH_ALGORITHMS.values())))
        raise ConfigError(f"Unsupported hash algorithm '{name}' (use one of: {supported})") from None


def digest(path: Path, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Compute the hex digest of a file's full content.

    Args:
        path: File to read.
        algorithm: hashlib name, already normalized by the run configuration.

    Returns:
        Lowercase hex digest.

    Raises:
        HashError: If the file cannot be read (permissions, vanished, I/O error).
    """
    h = hashlib.new(algorithm)
    try:
        with open(path, "rb") as f:
            while chunk := f.read(CHUNK_SIZE):
                h.update(chunk)
    except OSError as e:
        raise HashError(path, e.strerror or str(e)) from e
    return h.hexdigest()
