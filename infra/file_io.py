"""Whole-file text read/write collaborators.

Both helpers run to completion or raise :class:`OSError` (``FileNotFoundError``,
``PermissionError``, ``IsADirectoryError``, ...) unchanged to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


def read_text_file(path: str | Path, *, encoding: str = DEFAULT_ENCODING) -> str:
    """Return the complete content of *path* as text."""
    p = Path(path)
    with p.open("r", encoding=encoding, newline="") as fh:
        content = fh.read()
    logger.debug("Read %d characters from %s", len(content), p)
    return content


def write_text_file(path: str | Path, content: str, *, encoding: str = DEFAULT_ENCODING) -> Path:
    """Create or truncate *path* and write *content* to it.

    Missing parent directories are created. Returns the path written.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding=encoding, newline="") as fh:
        fh.write(content)
    logger.debug("Wrote %d characters to %s", len(content), p)
    return p
