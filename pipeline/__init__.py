"""Interval pipeline: CSV text -> HoleInterval records -> volume report.

Main exports:
- parse_intervals, read_intervals_csv
- render_report, write_report, REPORT_HEADER
"""

from pipeline.interval_reader import parse_intervals, read_intervals_csv
from pipeline.report_writer import REPORT_HEADER, render_report, write_report

__all__ = [
    "REPORT_HEADER",
    "parse_intervals",
    "read_intervals_csv",
    "render_report",
    "write_report",
]
