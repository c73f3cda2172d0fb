"""
services/volume_calculator.py

Openhole volume calculator
==========================

Each interval is treated as a uniform cylinder::

    V = pi * D^2 / 4 * L

with D the diameter in inches and L the length converted from feet to inches.
Cubic inches are the common basis; barrels and liters are derived from it.

Units:
- Input: diameter (in), length (ft)
- Output: cubic inches, barrels (1 bbl = 9702 in^3), liters (1 in^3 = 0.016387064 L)

All functions are pure. A valid HoleInterval always yields a finite positive volume.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from contracts.hole_interval import HoleInterval


# -------------------------
# Conversion constants (exact)
# -------------------------
INCHES_PER_FOOT: float = 12.0
CUBIC_INCHES_PER_BARREL: float = 9702.0
LITERS_PER_CUBIC_INCH: float = 0.016387064


def volume_cubic_inches(interval: HoleInterval) -> float:
    length_inches = interval.length_feet * INCHES_PER_FOOT
    return math.pi * interval.diameter_inches ** 2 / 4.0 * length_inches


def volume_barrels(interval: HoleInterval) -> float:
    return volume_cubic_inches(interval) / CUBIC_INCHES_PER_BARREL


def volume_liters(interval: HoleInterval) -> float:
    return volume_cubic_inches(interval) * LITERS_PER_CUBIC_INCH


def total_volume_barrels(intervals: Iterable[HoleInterval]) -> float:
    """Sum of per-interval barrels, accumulated in input order."""
    total = 0.0
    for interval in intervals:
        total += volume_barrels(interval)
    return total


def total_volume_liters(intervals: Iterable[HoleInterval]) -> float:
    """Sum of per-interval liters, accumulated in input order."""
    total = 0.0
    for interval in intervals:
        total += volume_liters(interval)
    return total


@dataclass(frozen=True)
class IntervalVolumes:
    """Computed volumes for one interval."""

    interval: HoleInterval
    cubic_inches: float
    barrels: float
    liters: float


def compute_volumes(interval: HoleInterval) -> IntervalVolumes:
    cubic_inches = volume_cubic_inches(interval)
    return IntervalVolumes(
        interval=interval,
        cubic_inches=cubic_inches,
        barrels=cubic_inches / CUBIC_INCHES_PER_BARREL,
        liters=cubic_inches * LITERS_PER_CUBIC_INCH,
    )


def format_fixed(value: float, places: int) -> str:
    """
    Fixed-point text with *places* decimals.

    Rounds half-up on the shortest decimal form of *value* (its repr), so 8.0625
    becomes "8.063" where float formatting would give "8.062".
    """
    quantum = Decimal(1).scaleb(-places)
    return f"{Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP):f}"


_RULE = "-" * 43


def format_interval_summary(interval: HoleInterval) -> str:
    """Multi-line console summary for one interval."""
    vols = compute_volumes(interval)
    return "\n".join(
        [
            _RULE,
            f"Interval: {interval.label}",
            f"Diameter: {format_fixed(interval.diameter_inches, 3)} in",
            f"Length: {format_fixed(interval.length_feet, 3)} ft",
            f"Volume: {format_fixed(vols.barrels, 4)} bbl | {format_fixed(vols.liters, 2)} L",
            _RULE,
        ]
    )
