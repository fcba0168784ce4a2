"""Render the self-contained HTML report.

The document has inline CSS, one Chart.js ``<script>`` from a CDN, and the
chart specifications from ``surveyscope.export.charts`` embedded as JSON
data blocks.  Which sections appear depends on the analysis mode.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

import jinja2

from surveyscope.analysis.models import FilteredView
from surveyscope.export.charts import chart_height, overall_donut_chart, themes_bar_chart
from surveyscope.models import AnalysisResult, Sentiment, Theme

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Survey Analysis Report"
DEFAULT_FOOTER = "Generated by Survey Comment Analyzer"
DEFAULT_CHART_CDN = "https://cdn.jsdelivr.net/npm/chart.js"

# ---------------------------------------------------------------------------
# Jinja2 template environment
# ---------------------------------------------------------------------------

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
    keep_trailing_newline=True,
)


def _script_json(data: object) -> str:
    """JSON that is safe to place inside a <script> element."""
    text = json.dumps(data, ensure_ascii=False)
    return text.replace("&", "\\u0026").replace("<", "\\u003c").replace(">", "\\u003e")


def _pct(count: int, total: int) -> str:
    return f"{count / total * 100:.1f}%" if total > 0 else "0%"


def _theme_card(theme: Theme) -> dict[str, object]:
    total = theme.total
    return {
        "name": theme.name,
        "total": total,
        "buckets": [
            {
                "key": s.value,
                "label": s.label,
                "count": theme.sentiment.get(s),
                "pct": _pct(theme.sentiment.get(s), total),
            }
            for s in Sentiment
        ],
    }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def to_document(
    result: AnalysisResult,
    view: FilteredView,
    *,
    generated_at: datetime | None = None,
    title: str = DEFAULT_TITLE,
    footer: str = DEFAULT_FOOTER,
    chart_cdn_url: str = DEFAULT_CHART_CDN,
) -> str:
    """Render the report for ``result`` using the themes in ``view``."""
    mode = result.analysis_mode
    generated_at = generated_at or datetime.now()

    theme_rows = [
        {
            "name": theme.name,
            "counts": theme.sentiment.as_list(),
            "total": theme.total,
            "count": mode.theme_count(theme),
        }
        for theme in view.themes
    ]

    tmpl = _jinja_env.get_template("report.html")
    html = tmpl.render(
        title=title,
        footer=footer,
        chart_cdn_url=chart_cdn_url,
        generated_date=generated_at.strftime("%Y-%m-%d"),
        generated_time=generated_at.strftime("%H:%M"),
        survey_question=result.survey_question,
        grand_total=view.grand_total,
        min_total=view.min_total,
        is_filtered=view.is_filtered,
        mode=mode.value,
        stacked=mode.has_sentiment_breakdown,
        section_title=mode.section_title,
        bar_chart_title=mode.bar_chart_title,
        bar_chart_height=chart_height(view),
        show_donut=mode.shows_overall_donut,
        show_theme_table=mode.shows_theme_table,
        show_theme_cards=mode.shows_theme_cards,
        sentiment_labels=[s.label for s in Sentiment],
        sentiment_keys=[s.value for s in Sentiment],
        theme_rows=theme_rows,
        theme_cards=[_theme_card(t) for t in view.themes],
        insights=result.insights,
        themes_chart_json=_script_json(themes_bar_chart(view, mode)),
        overall_chart_json=_script_json(overall_donut_chart(view)),
    )
    logger.debug("Rendered %s report: %d themes, %d chars", mode.value, len(view.themes), len(html))
    return html
