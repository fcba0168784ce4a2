"""Application settings loaded from environment variables or .env."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from surveyscope.export.html_report import DEFAULT_CHART_CDN, DEFAULT_FOOTER, DEFAULT_TITLE
from surveyscope.share import DEFAULT_URL_WARN_LENGTH


def _find_env_files() -> list[Path]:
    """Find .env files to load, searching upward from CWD.

    The first ``.env`` found walking up from the current directory wins, so
    ``surveyscope`` picks up project settings from any subfolder.
    """
    cwd = Path.cwd().resolve()
    for parent in [cwd, *cwd.parents]:
        env_path = parent / ".env"
        if env_path.is_file():
            return [env_path]
    return []


class SurveyscopeSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SURVEYSCOPE_",
        env_file=_find_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Report
    report_title: str = DEFAULT_TITLE
    report_footer: str = DEFAULT_FOOTER
    chart_cdn_url: str = DEFAULT_CHART_CDN

    # Sharing
    share_base_url: str = ""  # e.g. https://analyzer.example.com/
    share_url_warn_length: int = DEFAULT_URL_WARN_LENGTH

    # Filtering
    min_comment_threshold: int = Field(default=0, ge=0)

    # Output
    output_dir: Path = Path("output")


def load_settings(**overrides: object) -> SurveyscopeSettings:
    """Load settings, applying CLI overrides that were actually given.

    ``None`` values are dropped so unset CLI options fall through to the
    environment and defaults.
    """
    given = {k: v for k, v in overrides.items() if v is not None}
    return SurveyscopeSettings(**given)  # type: ignore[arg-type]
