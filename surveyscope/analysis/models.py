"""Data structures for derived views.

These are plain dataclasses (not Pydantic); they're recomputed on demand
from an ``AnalysisResult`` and never persisted or shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from surveyscope.models import SentimentCounts, Theme


@dataclass
class FilteredView:
    """Themes meeting a minimum-count threshold, ranked by total."""

    themes: list[Theme] = field(default_factory=list)
    overall_sentiment: SentimentCounts = field(default_factory=SentimentCounts.zero)
    grand_total: int = 0  # over all themes, ignoring the filter
    min_total: int = 0

    @property
    def is_filtered(self) -> bool:
        return self.min_total > 0

    def percentage(self, count: int) -> float:
        """Share of the unfiltered grand total, as 0–100."""
        if self.grand_total == 0:
            return 0.0
        return count / self.grand_total * 100
