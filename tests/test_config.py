"""Tests for surveyscope.config settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from surveyscope.config import load_settings


class TestLoadSettings:

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SURVEYSCOPE_MIN_COMMENT_THRESHOLD", raising=False)
        settings = load_settings()
        assert settings.report_title == "Survey Analysis Report"
        assert settings.chart_cdn_url.startswith("https://")
        assert settings.min_comment_threshold == 0

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SURVEYSCOPE_REPORT_TITLE", "Q3 Pulse")
        monkeypatch.setenv("SURVEYSCOPE_MIN_COMMENT_THRESHOLD", "4")
        settings = load_settings()
        assert settings.report_title == "Q3 Pulse"
        assert settings.min_comment_threshold == 4

    def test_none_overrides_fall_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SURVEYSCOPE_MIN_COMMENT_THRESHOLD", "4")
        assert load_settings(min_comment_threshold=None).min_comment_threshold == 4
        assert load_settings(min_comment_threshold=7).min_comment_threshold == 7

    def test_output_dir_override(self) -> None:
        assert load_settings(output_dir=Path("exports")).output_dir == Path("exports")
