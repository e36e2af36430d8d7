"""Utility helpers for pdftitlex."""
from __future__ import annotations

import logging
import os
import re
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Union

PathLike = Union[str, os.PathLike[str]]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
MAX_FILENAME_BYTES = 255

_ILLEGAL_CHARS = re.compile(r'[/?<>\\:*|"]')
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x80-\x9f]")
_RESERVED_NAMES = re.compile(r"^\.+$")
_WINDOWS_RESERVED = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
_WINDOWS_TRAILING = re.compile(r"[. ]+$")


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure package-wide logging."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("pdftitlex").setLevel(level)


def to_path(path: PathLike) -> Path:
    """Normalize an input path to :class:`Path`."""
    return Path(path).expanduser().resolve()


@contextmanager
def time_block(logger: logging.Logger, message: str) -> Iterator[None]:
    """Context manager that logs the execution time of a code block."""
    start = datetime.now(tz=timezone.utc)
    logger.debug("Starting %s", message)
    try:
        yield
    finally:
        end = datetime.now(tz=timezone.utc)
        elapsed = (end - start).total_seconds()
        logger.info("%s completed in %.2fs", message, elapsed)


def sanitize_filename(name: str, replacement: str = "") -> str:
    """Make ``name`` safe to use as a file name on common platforms.

    Path separators, reserved punctuation and control characters are
    replaced, Windows device names and trailing dots or spaces are removed,
    and the result is truncated to 255 UTF-8 bytes.
    """
    cleaned = _ILLEGAL_CHARS.sub(replacement, name)
    cleaned = _CONTROL_CHARS.sub(replacement, cleaned)
    cleaned = _RESERVED_NAMES.sub(replacement, cleaned)
    cleaned = _WINDOWS_RESERVED.sub(replacement, cleaned)
    cleaned = _WINDOWS_TRAILING.sub(replacement, cleaned)
    encoded = cleaned.encode("utf-8")
    if len(encoded) > MAX_FILENAME_BYTES:
        cleaned = encoded[:MAX_FILENAME_BYTES].decode("utf-8", "ignore")
    return cleaned
