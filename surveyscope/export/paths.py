"""Export file names and the one place export text touches the disk.

Layout:
    output/
    ├── survey_analysis_results.csv              # Summary sheet
    ├── survey_comment_details.csv               # Per-comment sheet (if comments)
    └── survey-analysis-report-YYYY-MM-DD.html   # Self-contained report
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from surveyscope.errors import ExportWriteFailure

logger = logging.getLogger(__name__)


@dataclass
class ExportPaths:
    """Computed paths for the export artifacts in one output directory."""

    output_dir: Path
    generated_on: date = field(default_factory=date.today)

    @property
    def summary_csv(self) -> Path:
        return self.output_dir / "survey_analysis_results.csv"

    @property
    def detail_csv(self) -> Path:
        return self.output_dir / "survey_comment_details.csv"

    @property
    def report_html(self) -> Path:
        return self.output_dir / f"survey-analysis-report-{self.generated_on.isoformat()}.html"


def write_export(path: Path, text: str) -> Path:
    """Write ``text`` as UTF-8, creating parent directories.

    Raises:
        ExportWriteFailure: if the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ExportWriteFailure(f"Could not write {path}: {exc.strerror or exc}") from exc
    logger.info("Wrote %s (%d chars)", path, len(text))
    return path
