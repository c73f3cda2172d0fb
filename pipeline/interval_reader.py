"""Interval CSV reader.

Turns raw CSV text into validated :class:`contracts.hole_interval.HoleInterval`
records.

Input format::

    label,diameter_in_inches,topDepth_in_feet,bottomDepth_in_feet
    # comments and blank lines are ignored anywhere
    Interval-1,8.5,100.0,150.0

Rules
-----
- Blank lines and lines whose first non-whitespace character is ``#`` are skipped.
- The first remaining line is a header and is discarded without inspection,
  even when it looks like data.
- Every later line must split on ``,`` into exactly four fields.
- Parsing is fail-fast: the first bad row raises and nothing is returned.
  Collecting every bad row instead would only change the loop below, not the
  per-row rules.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import List, Optional

from contracts.hole_interval import (
    HoleInterval,
    InvalidIntervalError,
    InvalidNumericError,
    InvalidRecordError,
    MalformedRowError,
)
from infra.file_io import DEFAULT_ENCODING, read_text_file

logger = logging.getLogger(__name__)

FIELD_COUNT = 4
COMMENT_PREFIX = "#"

# Plain ASCII decimal, optional exponent, optional d/f type suffix. No digit
# separators, no "inf"/"nan" words.
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[dDfF]?")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _split_lines(text: str) -> List[str]:
    """Split on \\n, \\r and \\r\\n only; other control characters stay inside the line."""
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _is_skipped(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIX)


def _parse_number(raw: str, *, line_no: int) -> float:
    txt = raw.strip()
    if not _NUMBER_RE.fullmatch(txt):
        raise InvalidNumericError(line_no, txt) from ValueError(f"not a decimal number: {txt!r}")
    value = float(txt.rstrip("dDfF"))
    if not math.isfinite(value):
        raise InvalidNumericError(line_no, txt) from ValueError(f"non-finite value: {txt!r}")
    return value


def _parse_row(line: str, *, line_no: int) -> HoleInterval:
    parts = line.strip().split(",")
    if len(parts) != FIELD_COUNT:
        raise MalformedRowError(line_no, len(parts))

    label, raw_diameter, raw_top, raw_bottom = parts
    diameter = _parse_number(raw_diameter, line_no=line_no)
    top_depth = _parse_number(raw_top, line_no=line_no)
    bottom_depth = _parse_number(raw_bottom, line_no=line_no)

    length = bottom_depth - top_depth
    if length <= 0:
        raise InvalidIntervalError(line_no, top_depth, bottom_depth)

    try:
        return HoleInterval(label=label, diameter_inches=diameter, length_feet=length)
    except InvalidRecordError as exc:
        raise exc.at_line(line_no) from exc


def parse_intervals(text: str, *, source: Optional[str] = None) -> List[HoleInterval]:
    """
    Parse the full text of an interval CSV.

    Returns records in input row order. Input without data rows (including
    comment-only or empty input) yields an empty list.

    Raises:
        MalformedRowError: a data row does not have exactly four fields
        InvalidNumericError: diameter/top/bottom is not a finite number
        InvalidIntervalError: bottom depth is not greater than top depth
        InvalidRecordError: the record itself is invalid (empty label, diameter <= 0)
    """
    intervals: List[HoleInterval] = []
    header_seen = False

    for line_no, line in enumerate(_split_lines(text), start=1):
        if _is_skipped(line):
            continue
        if not header_seen:
            header_seen = True
            logger.debug("Skipping header at line %d: %r", line_no, line.strip())
            continue
        intervals.append(_parse_row(line, line_no=line_no))

    logger.info("Parsed %d interval(s) from %s", len(intervals), source or "<text>")
    return intervals


def read_intervals_csv(path: str | Path, *, encoding: str = DEFAULT_ENCODING) -> List[HoleInterval]:
    """Read an interval CSV file and parse it. I/O errors propagate unchanged."""
    p = Path(path)
    text = read_text_file(p, encoding=encoding)
    return parse_intervals(text, source=str(p))
