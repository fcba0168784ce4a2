"""Tests for the surveyscope command-line interface."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from surveyscope import __version__
from surveyscope.cli import app
from surveyscope.models import AnalysisResult
from surveyscope.share import decode_token, encode_result

runner = CliRunner()


def _consistent_wire() -> dict:
    """Themes whose counts match the categorized comments exactly."""
    comments = (
        [{"text": f"Easy setup {i}", "theme": "Onboarding", "sentiment": "positive"} for i in range(2)]
        + [{"text": "Fine, I guess", "theme": "Onboarding", "sentiment": "neutral"}]
        + [{"text": f"No reply {i}", "theme": "Support", "sentiment": "negative"} for i in range(9)]
    )
    return {
        "surveyQuestion": "How was your first week?",
        "themes": [
            {"theme": "Onboarding", "sentiment": {"positive": 2, "neutral": 1, "negative": 0, "mixed": 0}},
            {"theme": "Support", "sentiment": {"positive": 0, "neutral": 0, "negative": 9, "mixed": 0}},
        ],
        "insights": [{"insight": "Slow support", "recommendation": "Staff up", "quotes": ["No reply 1"]}],
        "comments": comments,
        "analysisType": "both",
    }


@pytest.fixture
def result_file(tmp_path: Path) -> Path:
    path = tmp_path / "result.json"
    path.write_text(json.dumps(_consistent_wire()), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers bound to the runner's captured streams."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    logging.basicConfig(level=logging.WARNING, force=True)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SHARE_BASE_URL", "MIN_COMMENT_THRESHOLD", "OUTPUT_DIR"):
        monkeypatch.delenv(f"SURVEYSCOPE_{name}", raising=False)


class TestVersion:

    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestSummary:

    def test_lists_ranked_themes(self, result_file: Path) -> None:
        result = runner.invoke(app, ["summary", str(result_file)])
        assert result.exit_code == 0
        assert result.output.index("Support") < result.output.index("Onboarding")

    def test_min_count_filters(self, result_file: Path) -> None:
        result = runner.invoke(app, ["summary", str(result_file), "--min-count", "9"])
        assert result.exit_code == 0
        assert "Onboarding" not in result.output
        assert "1 of 2 shown" in result.output

    def test_malformed_input(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"themes": []}))
        result = runner.invoke(app, ["summary", str(bad)])
        assert result.exit_code == 1
        assert "malformed" in result.output

    def test_non_utf8_input(self, tmp_path: Path) -> None:
        bad = tmp_path / "latin1.json"
        bad.write_bytes(b'{"themes": [], "insights": [], "surveyQuestion": "caf\xe9"}')
        result = runner.invoke(app, ["summary", str(bad)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "not UTF-8 text" in result.output


class TestShareAndOpen:

    def test_share_prints_token(self, result_file: Path) -> None:
        result = runner.invoke(app, ["share", str(result_file)])
        assert result.exit_code == 0
        expected = AnalysisResult.from_wire(_consistent_wire())
        assert decode_token(result.output.strip()) == expected

    def test_share_with_url(self, result_file: Path) -> None:
        result = runner.invoke(app, ["share", str(result_file), "--url", "https://example.com/"])
        assert result.exit_code == 0
        assert result.output.startswith("https://example.com/#")

    def test_open_url_writes_json(self, tmp_path: Path, both_result: AnalysisResult) -> None:
        out = tmp_path / "decoded.json"
        link = f"https://example.com/#{encode_result(both_result)}"
        result = runner.invoke(app, ["open", link, "-o", str(out)])
        assert result.exit_code == 0
        decoded = AnalysisResult.from_wire(json.loads(out.read_text(encoding="utf-8")))
        assert decoded == both_result

    def test_open_bare_token_prints_json(self, both_result: AnalysisResult) -> None:
        result = runner.invoke(app, ["open", encode_result(both_result)])
        assert result.exit_code == 0
        assert json.loads(result.output)["analysisType"] == "both"

    def test_open_corrupt_link(self) -> None:
        result = runner.invoke(app, ["open", "https://example.com/#garbage!!"])
        assert result.exit_code == 1
        assert "invalid or corrupted" in result.output


class TestExport:

    def test_writes_all_artifacts(self, tmp_path: Path, result_file: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(app, ["export", str(result_file), "-o", str(out)])
        assert result.exit_code == 0
        assert (out / "survey_analysis_results.csv").is_file()
        assert (out / "survey_comment_details.csv").is_file()
        reports = list(out.glob("survey-analysis-report-*.html"))
        assert len(reports) == 1
        assert (out / ".surveyscope" / "surveyscope.log").is_file()

    def test_single_format(self, tmp_path: Path, result_file: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app, ["export", str(result_file), "-o", str(out), "--format", "csv", "-m", "9"]
        )
        assert result.exit_code == 0
        text = (out / "survey_analysis_results.csv").read_text(encoding="utf-8")
        assert "Onboarding" not in text
        assert not (out / "survey_comment_details.csv").exists()

    def test_detail_skipped_without_comments(self, tmp_path: Path) -> None:
        path = tmp_path / "result.json"
        path.write_text(json.dumps({"themes": [], "insights": []}))
        out = tmp_path / "out"
        result = runner.invoke(app, ["export", str(path), "-o", str(out), "-f", "detail"])
        assert result.exit_code == 0
        assert "skipping detail CSV" in result.output
        assert not (out / "survey_comment_details.csv").exists()
