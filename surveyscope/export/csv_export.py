"""Delimited-text (CSV) exports: the summary sheet and the per-comment sheet."""

from __future__ import annotations

from collections.abc import Iterable

from surveyscope.analysis.models import FilteredView
from surveyscope.models import AnalysisMode, AnalysisResult, Sentiment

_THEME_SECTIONS: dict[AnalysisMode, tuple[str, list[str]]] = {
    AnalysisMode.BOTH: (
        "Themes & Sentiment",
        ["Theme", *(s.label for s in Sentiment), "Total"],
    ),
    AnalysisMode.THEME_ONLY: ("Themes Volume", ["Theme", "Total Count"]),
    AnalysisMode.SENTIMENT_ONLY: ("Sentiment Distribution", ["Sentiment", "Count"]),
}

_DETAIL_COLUMNS: dict[AnalysisMode, list[str]] = {
    AnalysisMode.BOTH: ["Comment", "Theme", "Sentiment"],
    AnalysisMode.THEME_ONLY: ["Comment", "Theme"],
    AnalysisMode.SENTIMENT_ONLY: ["Comment", "Sentiment"],
}

INSIGHT_COLUMNS = ["Insight", "Category/Theme", "Recommendation", "Evidence/Quotes"]
QUOTE_SEPARATOR = "; "


def escape_field(value: object) -> str:
    """Quote a field if it contains a comma, double quote or newline."""
    text = "" if value is None else str(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def _row(fields: Iterable[object]) -> str:
    return ",".join(escape_field(f) for f in fields)


def to_delimited_text(result: AnalysisResult, view: FilteredView) -> str:
    """Render the summary CSV: themes section, grand total, then insights."""
    mode = result.analysis_mode
    lines: list[str] = []

    if result.survey_question:
        lines.append(_row(["Survey Question", result.survey_question]))
        lines.append("")

    heading, columns = _THEME_SECTIONS[mode]
    lines.append(heading)
    lines.append(_row(columns))
    for theme in view.themes:
        if mode is AnalysisMode.BOTH:
            lines.append(_row([theme.name, *theme.sentiment.as_list(), theme.total]))
        else:
            # sentiment-only: the theme name is the bucket label
            lines.append(_row([theme.name, mode.theme_count(theme)]))

    lines.append("")
    lines.append(_row(["Overall Total Comments Analyzed", view.grand_total]))
    lines.append("")
    lines.append("")

    lines.append("Actionable Insights & Recommendations")
    lines.append(_row(INSIGHT_COLUMNS))
    for item in result.insights:
        lines.append(_row([
            item.insight,
            item.related_theme,
            item.recommendation,
            QUOTE_SEPARATOR.join(item.quotes),
        ]))

    return "\n".join(lines) + "\n"


def to_detail_text(result: AnalysisResult) -> str | None:
    """Render one row per categorized comment, or ``None`` without comments."""
    if result.comments is None:
        return None
    mode = result.analysis_mode
    lines = [_row(_DETAIL_COLUMNS[mode])]
    for comment in result.comments:
        if mode is AnalysisMode.THEME_ONLY:
            fields = [comment.text, comment.theme]
        elif mode is AnalysisMode.SENTIMENT_ONLY:
            fields = [comment.text, comment.sentiment.value]
        else:
            fields = [comment.text, comment.theme, comment.sentiment.value]
        lines.append(_row(fields))
    return "\n".join(lines) + "\n"
