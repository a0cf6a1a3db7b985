"""Open a ROMS log file and run the parser over it."""

import bz2
import gzip
import logging
import lzma
import os
from pathlib import Path
from typing import TextIO

from romslog.errors import InvalidArgumentError, UnreadableError
from romslog.models import LogSummary
from romslog.parsers.roms_log import LogParser

log = logging.getLogger(__name__)

# suffix -> opener accepting (path, mode, errors=...)
DECOMPRESSORS = {
    ".gz": gzip.open,
    ".bz2": bz2.open,
    ".xz": lzma.open,
}


def resolve_log_path(path) -> Path:
    """Check that exactly one path-like log reference was supplied."""
    if path is None:
        raise InvalidArgumentError("no log file given")
    if isinstance(path, (list, tuple, set, frozenset)):
        if len(path) != 1:
            raise InvalidArgumentError(f"expected exactly one log file, got {len(path)}")
        (path,) = path
    if not isinstance(path, (str, os.PathLike)):
        raise InvalidArgumentError(
            f"log file must be a path, not {type(path).__name__}"
        )
    if isinstance(path, str) and not path:
        raise InvalidArgumentError("no log file given")
    return Path(path)


def open_log(filepath: Path) -> TextIO:
    """Open ``filepath`` as text, decompressing by suffix."""
    opener = DECOMPRESSORS.get(filepath.suffix.lower())
    try:
        if opener is not None:
            return opener(filepath, "rt", errors="replace")
        return open(filepath, "r", errors="replace")
    except OSError as e:
        raise UnreadableError(f"cannot open '{filepath}': {e.strerror or e}") from e


def read_log(path, verbose: bool = False) -> LogSummary:
    """Parse one ROMS log file and return its summary."""
    filepath = resolve_log_path(path)
    log.debug("reading %s", filepath)
    with open_log(filepath) as f:
        return LogParser(f, verbose=verbose).parse()
