"""Declarative chart specifications (Chart.js config objects).

The dicts built here are JSON-serialisable and are embedded verbatim in the
HTML report; any Chart.js renderer can draw them without this package.
"""

from __future__ import annotations

from surveyscope.analysis.models import FilteredView
from surveyscope.models import AnalysisMode, Sentiment

SENTIMENT_COLOURS: dict[Sentiment, str] = {
    Sentiment.POSITIVE: "#22c55e",
    Sentiment.NEUTRAL: "#64748b",
    Sentiment.NEGATIVE: "#ef4444",
    Sentiment.MIXED: "#eab308",
}
COUNT_COLOUR = "#06b6d4"

_MIN_BAR_CHART_PX = 300
_PX_PER_THEME = 40


def chart_height(view: FilteredView) -> int:
    """Pixel height for the horizontal bar chart, growing with theme count."""
    return max(_MIN_BAR_CHART_PX, len(view.themes) * _PX_PER_THEME)


def themes_bar_chart(view: FilteredView, mode: AnalysisMode) -> dict:
    """Horizontal bar chart of the filtered themes.

    ``theme-only`` gets a single "Count" series; the other modes get one
    stacked series per sentiment bucket.
    """
    labels = [theme.name for theme in view.themes]
    stacked = mode.has_sentiment_breakdown
    if stacked:
        datasets = [
            {
                "label": sentiment.label,
                "data": [theme.sentiment.get(sentiment) for theme in view.themes],
                "backgroundColor": colour,
            }
            for sentiment, colour in SENTIMENT_COLOURS.items()
        ]
    else:
        datasets = [
            {
                "label": "Count",
                "data": [mode.theme_count(theme) for theme in view.themes],
                "backgroundColor": COUNT_COLOUR,
            }
        ]
    return {
        "type": "bar",
        "data": {"labels": labels, "datasets": datasets},
        "options": {
            "indexAxis": "y",
            "responsive": True,
            "maintainAspectRatio": False,
            "scales": {"x": {"stacked": stacked}, "y": {"stacked": stacked}},
            "plugins": {"legend": {"position": "bottom", "display": stacked}},
        },
    }


def overall_donut_chart(view: FilteredView) -> dict:
    """Doughnut of the filtered themes' combined sentiment."""
    return {
        "type": "doughnut",
        "data": {
            "labels": [s.label for s in SENTIMENT_COLOURS],
            "datasets": [
                {
                    "data": view.overall_sentiment.as_list(),
                    "backgroundColor": list(SENTIMENT_COLOURS.values()),
                    "borderWidth": 0,
                }
            ],
        },
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "plugins": {"legend": {"position": "bottom"}},
        },
    }
