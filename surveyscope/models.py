"""Pydantic models for survey comment analysis results.

The wire format (JSON keys) is camelCase, matching what the upstream
classification service returns and what share tokens carry.  Python code uses
the snake_case attribute names; both are accepted on input.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from surveyscope.errors import MalformedResult

logger = logging.getLogger(__name__)


class Sentiment(str, Enum):
    """Sentiment buckets, in canonical display order."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    MIXED = "mixed"

    @property
    def label(self) -> str:
        return self.value.capitalize()


SENTIMENTS = [s.value for s in Sentiment]


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SentimentCounts(_WireModel):
    """Comment counts per sentiment bucket."""

    positive: int = Field(ge=0)
    neutral: int = Field(ge=0)
    negative: int = Field(ge=0)
    mixed: int = Field(ge=0)

    @classmethod
    def zero(cls) -> SentimentCounts:
        return cls(positive=0, neutral=0, negative=0, mixed=0)

    @property
    def total(self) -> int:
        return self.positive + self.neutral + self.negative + self.mixed

    def get(self, sentiment: Sentiment | str) -> int:
        return getattr(self, Sentiment(sentiment).value)

    def as_list(self) -> list[int]:
        """Counts in canonical order (positive, neutral, negative, mixed)."""
        return [self.positive, self.neutral, self.negative, self.mixed]

    def __add__(self, other: SentimentCounts) -> SentimentCounts:
        if not isinstance(other, SentimentCounts):
            return NotImplemented
        return SentimentCounts(
            positive=self.positive + other.positive,
            neutral=self.neutral + other.neutral,
            negative=self.negative + other.negative,
            mixed=self.mixed + other.mixed,
        )


class Theme(_WireModel):
    """A named cluster of comments with its sentiment breakdown."""

    name: str = Field(alias="theme")
    sentiment: SentimentCounts

    @property
    def total(self) -> int:
        return self.sentiment.total


class Insight(_WireModel):
    insight: str
    recommendation: str
    quotes: list[str] = Field(default_factory=list)
    related_theme: str | None = Field(default=None, alias="relatedTheme")


class CategorizedComment(_WireModel):
    """One input comment with the theme and sentiment it was assigned."""

    text: str
    theme: str
    sentiment: Sentiment


class AnalysisMode(str, Enum):
    """Which dimensions of a result are meaningful.

    ``theme-only`` results store each theme's comment count in the
    ``neutral`` field, and ``sentiment-only`` results use one synthetic theme
    per sentiment bucket.  Those conventions stay on the wire; code that needs
    "the number to show for this theme" asks the mode via ``theme_count()``.
    """

    BOTH = "both"
    THEME_ONLY = "theme-only"
    SENTIMENT_ONLY = "sentiment-only"

    def theme_count(self, theme: Theme) -> int:
        if self is AnalysisMode.THEME_ONLY:
            return theme.sentiment.neutral
        return theme.total

    @property
    def has_sentiment_breakdown(self) -> bool:
        return self is not AnalysisMode.THEME_ONLY

    @property
    def shows_overall_donut(self) -> bool:
        return self is not AnalysisMode.THEME_ONLY

    @property
    def shows_theme_table(self) -> bool:
        return self is not AnalysisMode.SENTIMENT_ONLY

    @property
    def shows_theme_cards(self) -> bool:
        return self is AnalysisMode.BOTH

    @property
    def section_title(self) -> str:
        return _SECTION_TITLES[self]

    @property
    def bar_chart_title(self) -> str:
        return _BAR_CHART_TITLES[self]


_SECTION_TITLES = {
    AnalysisMode.BOTH: "Key Themes & Sentiment",
    AnalysisMode.THEME_ONLY: "Key Themes",
    AnalysisMode.SENTIMENT_ONLY: "Sentiment",
}

_BAR_CHART_TITLES = {
    AnalysisMode.BOTH: "Themes Sentiment Breakdown",
    AnalysisMode.THEME_ONLY: "Themes Volume",
    AnalysisMode.SENTIMENT_ONLY: "Sentiment",
}

_MODE_KEYS = ("analysisType", "analysisMode", "analysis_mode")


class AnalysisResult(_WireModel):
    """Complete output of one classification run.

    Treated as immutable once created.  Older stored results carry no
    ``analysisType``; those are read as ``both``.
    """

    survey_question: str | None = Field(default=None, alias="surveyQuestion")
    themes: list[Theme]
    insights: list[Insight]
    comments: list[CategorizedComment] | None = None
    analysis_mode: AnalysisMode = Field(
        default=AnalysisMode.BOTH,
        validation_alias=AliasChoices(*_MODE_KEYS),
        serialization_alias="analysisType",
    )

    @classmethod
    def from_wire(cls, data: object) -> AnalysisResult:
        """Validate a decoded JSON value, raising ``MalformedResult`` on failure."""
        if isinstance(data, dict) and not any(k in data for k in _MODE_KEYS):
            logger.debug("Result has no analysisType; defaulting to 'both'")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            errors = [
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in exc.errors()
            ]
            raise MalformedResult(
                f"Analysis result is malformed ({len(errors)} error(s))", errors
            ) from exc

    def to_wire(self) -> dict:
        """JSON-ready dict using the camelCase wire keys, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def load_result(path: Path) -> AnalysisResult:
    """Read an analysis result from a JSON file."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedResult(f"{path.name} is not UTF-8 text") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResult(f"{path.name} is not valid JSON: {exc.msg}") from exc
    return AnalysisResult.from_wire(data)
