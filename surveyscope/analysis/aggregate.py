"""Filter and rank themes, and recompute sentiment totals from the result."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from surveyscope.analysis.models import FilteredView
from surveyscope.models import (
    AnalysisMode,
    AnalysisResult,
    CategorizedComment,
    SentimentCounts,
    Theme,
)

logger = logging.getLogger(__name__)


def sum_sentiment(themes: Iterable[Theme]) -> SentimentCounts:
    """Componentwise sum of the themes' sentiment counts."""
    total = SentimentCounts.zero()
    for theme in themes:
        total = total + theme.sentiment
    return total


def grand_total(themes: Iterable[Theme]) -> int:
    return sum(theme.total for theme in themes)


def filter_and_rank(result: AnalysisResult, min_total: int = 0) -> FilteredView:
    """Keep themes with ``total >= min_total``, largest first.

    Equal totals keep their original relative order.  ``overall_sentiment``
    covers only the kept themes; ``grand_total`` covers every theme so it can
    serve as a stable denominator while the filter changes.
    """
    kept = [theme for theme in result.themes if theme.total >= min_total]
    ranked = sorted(kept, key=lambda theme: theme.total, reverse=True)
    view = FilteredView(
        themes=ranked,
        overall_sentiment=sum_sentiment(ranked),
        grand_total=grand_total(result.themes),
        min_total=min_total,
    )
    logger.debug(
        "Filtered %d/%d themes at min_total=%d",
        len(ranked), len(result.themes), min_total,
    )
    return view


def tally_comments(comments: Iterable[CategorizedComment]) -> dict[str, SentimentCounts]:
    """Per-theme sentiment counts rebuilt from individual comment labels."""
    counters: dict[str, Counter[str]] = {}
    for comment in comments:
        counters.setdefault(comment.theme, Counter())[comment.sentiment.value] += 1
    return {
        name: SentimentCounts(
            positive=c["positive"], neutral=c["neutral"],
            negative=c["negative"], mixed=c["mixed"],
        )
        for name, c in counters.items()
    }


def comment_breakdown_mismatches(result: AnalysisResult) -> list[str]:
    """Theme names whose counts disagree with the categorized comments.

    Only ``both`` results carry per-theme sentiment tallies that comments can
    be checked against.  Returns an empty list when there is nothing to check.
    """
    if result.analysis_mode is not AnalysisMode.BOTH or result.comments is None:
        return []
    tallies = tally_comments(result.comments)
    mismatched: list[str] = []
    seen: set[str] = set()
    for theme in result.themes:
        seen.add(theme.name)
        if tallies.get(theme.name, SentimentCounts.zero()) != theme.sentiment:
            mismatched.append(theme.name)
    mismatched.extend(name for name in tallies if name not in seen)
    return mismatched
