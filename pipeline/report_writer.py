"""Volume report writer.

Serializes intervals and their computed volumes to CSV text::

    Label,Diameter(in),Length(ft),Volume(bbl),Volume(L)
    Interval-1,8.500,50.000,3.509278,557.93

Labels are written as-is. No quoting or escaping is applied, so a label that
contains ``,`` produces a row with extra columns.

Numbers are rounded half-up on their shortest decimal form (see
:func:`services.volume_calculator.format_fixed`).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from contracts.hole_interval import HoleInterval
from infra.file_io import DEFAULT_ENCODING, write_text_file
from services.volume_calculator import IntervalVolumes, compute_volumes, format_fixed

logger = logging.getLogger(__name__)

REPORT_HEADER = "Label,Diameter(in),Length(ft),Volume(bbl),Volume(L)"


def format_report_row(volumes: IntervalVolumes) -> str:
    h = volumes.interval
    return ",".join(
        [
            h.label,
            format_fixed(h.diameter_inches, 3),
            format_fixed(h.length_feet, 3),
            format_fixed(volumes.barrels, 6),
            format_fixed(volumes.liters, 2),
        ]
    )


def render_report(intervals: Iterable[HoleInterval]) -> str:
    """Return the full report text, one newline-terminated line per interval."""
    lines: List[str] = [REPORT_HEADER]
    for interval in intervals:
        lines.append(format_report_row(compute_volumes(interval)))
    return "\n".join(lines) + "\n"


def write_report(
    path: str | Path,
    intervals: Sequence[HoleInterval],
    *,
    encoding: str = DEFAULT_ENCODING,
) -> Path:
    """Write the report for *intervals* to *path* (created or truncated).

    Write failures propagate as :class:`OSError`.
    """
    written = write_text_file(path, render_report(intervals), encoding=encoding)
    logger.info("Wrote volume report for %d interval(s) to %s", len(intervals), written)
    return written
