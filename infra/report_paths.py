"""Path conventions for volume reports.

All code that needs to know where a report goes when the user did not name an
output file should go through :class:`infra.report_paths.ReportPaths`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from infra.config import ReportConfig


def _p(path: str | Path) -> Path:
    return path if isinstance(path, Path) else Path(str(path))


@dataclass(frozen=True)
class ReportPaths:
    """
    Central path conventions for report outputs.

    Rules:
      - CLI may override the output file outright (--out)
      - Otherwise reports land in ``base_output_dir`` and are named after the
        input file (``<stem><report_suffix><report_extension>``)
      - Manual-entry runs have no input file and use ``manual_report_stem``
    """

    base_output_dir: Path = Path(".")

    report_suffix: str = "_volumes"
    report_extension: str = ".csv"
    manual_report_stem: str = "manual_entry"

    # Optional override (used by CLI to point elsewhere)
    output_override: Optional[Path] = None

    def __post_init__(self) -> None:
        for name in ("base_output_dir", "output_override"):
            val = getattr(self, name)
            if val is None:
                continue
            if not isinstance(val, Path):
                raise TypeError(f"{name} must be a pathlib.Path (got {type(val)})")

        for name in ("report_suffix", "manual_report_stem"):
            v = getattr(self, name)
            if not isinstance(v, str) or not v.strip():
                raise ValueError(f"{name} must be a non-empty string")
            if "/" in v or "\\" in v:
                raise ValueError(f"{name} must be a simple name, not a path: {v!r}")

        if not self.report_extension.startswith("."):
            raise ValueError(f"report_extension must start with '.': {self.report_extension!r}")

    # -------------------------
    # Resolved paths
    # -------------------------

    def report_path_for(self, input_path: str | Path) -> Path:
        """Report path for a file-sourced run."""
        if self.output_override is not None:
            return self.output_override
        stem = _p(input_path).stem
        return self.base_output_dir / f"{stem}{self.report_suffix}{self.report_extension}"

    def manual_report_path(self) -> Path:
        """Report path for a manual-entry run."""
        if self.output_override is not None:
            return self.output_override
        return self.base_output_dir / f"{self.manual_report_stem}{self.report_suffix}{self.report_extension}"

    # -------------------------
    # Constructors
    # -------------------------

    @classmethod
    def from_config(cls, config: ReportConfig, *, output: str | Path | None = None) -> "ReportPaths":
        """
        Preferred way for the CLI to combine configured defaults with an explicit --out.
        """
        return cls(
            base_output_dir=_p(config.output_dir),
            report_suffix=config.report_suffix,
            output_override=_p(output) if output else None,
        )
