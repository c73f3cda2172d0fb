"""Contracts for interval records.

The contracts package defines:
- the HoleInterval value object (validated on construction)
- the record error taxonomy raised by parsing and construction

Main exports:
- HoleInterval
- RecordError, RecordErrorKind
- MalformedRowError, InvalidNumericError, InvalidIntervalError, InvalidRecordError
"""

from contracts.hole_interval import (
    HoleInterval,
    InvalidIntervalError,
    InvalidNumericError,
    InvalidRecordError,
    MalformedRowError,
    RecordError,
    RecordErrorKind,
)

__all__ = [
    "HoleInterval",
    "InvalidIntervalError",
    "InvalidNumericError",
    "InvalidRecordError",
    "MalformedRowError",
    "RecordError",
    "RecordErrorKind",
]
