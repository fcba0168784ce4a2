"""Theme filtering, ranking and aggregate recomputation."""

from surveyscope.analysis.aggregate import (
    comment_breakdown_mismatches,
    filter_and_rank,
    grand_total,
    sum_sentiment,
    tally_comments,
)
from surveyscope.analysis.models import FilteredView

__all__ = [
    "FilteredView",
    "comment_breakdown_mismatches",
    "filter_and_rank",
    "grand_total",
    "sum_sentiment",
    "tally_comments",
]
