"""Unit tests for the config module."""

from pydantic import ValidationError
import pytest

from lesson_search.config import Settings


pytestmark = pytest.mark.unit


class TestSettings:
    """Test configuration loading and validation."""

    def test_defaults(self, monkeypatch):
        for name in ("MAX_RESULTS", "MIN_QUERY_LENGTH", "SEARCH_TEXT_LIMIT", "HIGHLIGHT_STYLE"):
            monkeypatch.delenv(f"LESSON_SEARCH_{name}", raising=False)
        settings = Settings(_env_file=None)
        assert settings.max_results == 12
        assert settings.min_query_length == 2
        assert settings.search_text_limit == 4000
        assert settings.title_weight == 10
        assert settings.body_weight == 1
        assert settings.excerpt_before == 30
        assert settings.excerpt_after == 100
        assert settings.highlight_style == "html"

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("LESSON_SEARCH_MAX_RESULTS", "5")
        monkeypatch.setenv("LESSON_SEARCH_HIGHLIGHT_STYLE", "plain")
        settings = Settings(_env_file=None)
        assert settings.max_results == 5
        assert settings.highlight_style == "plain"

    def test_rejects_unknown_highlight_style(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, highlight_style="bold")

    def test_rejects_zero_results(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_results=0)

    def test_body_weight_must_stay_below_title_weight(self):
        with pytest.raises(ValueError, match="LESSON_SEARCH_BODY_WEIGHT"):
            Settings(_env_file=None, title_weight=3, body_weight=3)
