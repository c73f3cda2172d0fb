"""
hole_interval.py

Interval record value object and the record error taxonomy.

A :class:`HoleInterval` is a contiguous borehole segment (label, diameter,
length) over which volume is computed as a uniform cylinder. Construction is
the only validation gate: an instance either satisfies every invariant or is
never created.

Error kinds are exposed both as exception classes and as a
:class:`RecordErrorKind` tag, so callers may dispatch on either.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


# -----------------------------
# Exceptions
# -----------------------------


class RecordErrorKind(str, Enum):
    """Tag carried by every :class:`RecordError`."""

    MALFORMED_ROW = "malformed_row"
    INVALID_NUMERIC = "invalid_numeric"
    INVALID_INTERVAL = "invalid_interval"
    INVALID_RECORD = "invalid_record"


class RecordError(ValueError):
    """Base class for interval record parse/validation failures."""

    kind: RecordErrorKind = RecordErrorKind.INVALID_RECORD

    def __init__(self, message: str, *, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.line = line


class MalformedRowError(RecordError):
    """A CSV data row does not have exactly four fields."""

    kind = RecordErrorKind.MALFORMED_ROW

    def __init__(self, line: int, field_count: int) -> None:
        super().__init__(
            f"Invalid format at line {line}: expected 4 fields "
            f"(label, diameter, topDepth, bottomDepth), got {field_count}",
            line=line,
        )
        self.field_count = field_count


class InvalidNumericError(RecordError):
    """A numeric CSV field could not be parsed as a finite number.

    Raised ``from`` the underlying parse failure, so ``__cause__`` holds it.
    """

    kind = RecordErrorKind.INVALID_NUMERIC

    def __init__(self, line: int, value: str) -> None:
        super().__init__(f"Invalid numeric value at line {line}: {value!r}", line=line)
        self.value = value


class InvalidIntervalError(RecordError):
    """Bottom depth is not strictly greater than top depth."""

    kind = RecordErrorKind.INVALID_INTERVAL

    def __init__(self, line: int, top_depth: float, bottom_depth: float) -> None:
        super().__init__(
            f"Invalid data at line {line}: bottom depth ({bottom_depth:g}) "
            f"must be greater than top depth ({top_depth:g})",
            line=line,
        )
        self.top_depth = top_depth
        self.bottom_depth = bottom_depth


class InvalidRecordError(RecordError):
    """Direct construction of a :class:`HoleInterval` was rejected."""

    kind = RecordErrorKind.INVALID_RECORD

    def __init__(self, field: str, reason: str, *, line: Optional[int] = None) -> None:
        prefix = f"Invalid data at line {line}: " if line is not None else ""
        super().__init__(f"{prefix}{field}: {reason}", line=line)
        self.field = field
        self.reason = reason

    def at_line(self, line: int) -> InvalidRecordError:
        """Return a copy of this error that names the source line."""
        return InvalidRecordError(self.field, self.reason, line=line)


# -----------------------------
# Value object
# -----------------------------


def _require_positive(field: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(field, f"must be a number (got {value!r})") from exc
    # NaN fails the comparison, so it is rejected here too
    if not number > 0 or math.isinf(number):
        raise InvalidRecordError(field, f"must be a finite number greater than 0 (got {value!r})")
    return number


@dataclass(frozen=True)
class HoleInterval:
    """One openhole interval: label, diameter (inches), length (feet)."""

    label: str
    diameter_inches: float
    length_feet: float

    def __post_init__(self) -> None:
        if not isinstance(self.label, str) or not self.label.strip():
            raise InvalidRecordError("label", "cannot be empty")
        object.__setattr__(self, "label", self.label.strip())
        object.__setattr__(self, "diameter_inches", _require_positive("diameter_inches", self.diameter_inches))
        object.__setattr__(self, "length_feet", _require_positive("length_feet", self.length_feet))

    # "Setters" return a new, re-validated record.

    def with_label(self, label: str) -> HoleInterval:
        return replace(self, label=label)

    def with_diameter(self, diameter_inches: float) -> HoleInterval:
        return replace(self, diameter_inches=diameter_inches)

    def with_length(self, length_feet: float) -> HoleInterval:
        return replace(self, length_feet=length_feet)

    def __str__(self) -> str:
        return f"{self.label} [Diameter: {self.diameter_inches:.2f} in | Length: {self.length_feet:.2f} ft]"


__all__ = [
    "HoleInterval",
    "InvalidIntervalError",
    "InvalidNumericError",
    "InvalidRecordError",
    "MalformedRowError",
    "RecordError",
    "RecordErrorKind",
]
