"""Shared test fixtures for surveyscope tests."""

from __future__ import annotations

import pytest

from surveyscope.models import AnalysisResult


def _result(**fields: object) -> AnalysisResult:
    """Build a result from wire-format keywords, defaulting the required lists."""
    data: dict[str, object] = {"themes": [], "insights": []}
    data.update(fields)
    return AnalysisResult.from_wire(data)


def _theme(name: str, positive: int = 0, neutral: int = 0, negative: int = 0, mixed: int = 0) -> dict:
    return {
        "theme": name,
        "sentiment": {
            "positive": positive, "neutral": neutral, "negative": negative, "mixed": mixed,
        },
    }


@pytest.fixture
def both_result() -> AnalysisResult:
    """Two themes with full sentiment breakdowns, plus matching comments."""
    return _result(
        surveyQuestion="How was your first week?",
        themes=[
            _theme("Onboarding", positive=5, neutral=2, negative=1),
            _theme("Support", positive=1, neutral=1, negative=8),
        ],
        insights=[
            {
                "insight": "Support response times frustrate users",
                "recommendation": "Add a second support shift",
                "quotes": ['Waited "forever", honestly', "No reply for 3 days"],
                "relatedTheme": "Support",
            },
        ],
        comments=[
            {"text": "Setup was easy", "theme": "Onboarding", "sentiment": "positive"},
            {"text": "Nobody answered, twice", "theme": "Support", "sentiment": "negative"},
        ],
        analysisType="both",
    )


@pytest.fixture
def theme_only_result() -> AnalysisResult:
    """Theme counts carried in the neutral field."""
    return _result(
        themes=[_theme("Pricing", neutral=4), _theme("Performance", neutral=9)],
        insights=[],
        comments=[{"text": "Too pricey", "theme": "Pricing", "sentiment": "neutral"}],
        analysisType="theme-only",
    )


@pytest.fixture
def sentiment_only_result() -> AnalysisResult:
    """One synthetic theme per sentiment bucket."""
    return _result(
        themes=[
            _theme("Positive", positive=6),
            _theme("Neutral", neutral=2),
            _theme("Negative", negative=7),
            _theme("Mixed", mixed=1),
        ],
        insights=[],
        comments=[{"text": "Love it", "theme": "Positive", "sentiment": "positive"}],
        analysisType="sentiment-only",
    )
