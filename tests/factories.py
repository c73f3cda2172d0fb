"""Shared lightweight factories for tests.

These helpers reduce repeated HoleInterval / CSV boilerplate without
introducing runtime dependencies on external factory libraries.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from contracts.hole_interval import HoleInterval

DEFAULT_HEADER = "label,diameter_in_inches,topDepth_in_feet,bottomDepth_in_feet"


def make_interval(**overrides: Any) -> HoleInterval:
    """Build a HoleInterval with deterministic defaults and optional overrides."""
    data: dict[str, Any] = {
        "label": "Interval-1",
        "diameter_inches": 8.5,
        "length_feet": 50.0,
    }
    data.update(overrides)
    return HoleInterval(**data)


def make_csv(rows: Iterable[Sequence[Any] | str], *, header: str | None = DEFAULT_HEADER) -> str:
    """Build interval CSV text; tuple rows are comma-joined, string rows kept verbatim."""
    lines: list[str] = [] if header is None else [header]
    for row in rows:
        lines.append(row if isinstance(row, str) else ",".join(str(v) for v in row))
    return "\n".join(lines) + "\n"
