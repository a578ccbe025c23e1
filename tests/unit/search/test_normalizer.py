"""Unit tests for markdown normalization."""

import pytest

from lesson_search.search.normalizer import normalize


@pytest.mark.unit
class TestNormalize:
    """Tests for normalize function."""

    def test_empty_and_whitespace_input(self):
        assert normalize("") == ""
        assert normalize("   \n\t  ") == ""

    def test_lowercases_text(self):
        assert normalize("Hello World") == "hello world"

    def test_removes_fenced_code_blocks_entirely(self):
        raw = "Before\n```python\nSecretIdentifier = 1\n```\nAfter"
        result = normalize(raw)
        assert "secretidentifier" not in result
        assert result == "before after"

    def test_removes_inline_code_spans(self):
        result = normalize("Run `pip install thing` now")
        assert "pip" not in result
        assert result == "run now"

    def test_removes_heading_markers(self):
        assert normalize("## Getting Started") == "getting started"
        assert normalize("###### Deep") == "deep"

    def test_strips_markup_punctuation(self):
        raw = "**bold** _em_ ~~strike~~ [link](http) > quote | cell | ![img]"
        result = normalize(raw)
        for char in "*_~[]()>|!#":
            assert char not in result
        assert "bold em strike link http quote cell img" == result

    def test_collapses_whitespace_runs(self):
        assert normalize("a   b\n\n\nc\t\td") == "a b c d"

    def test_is_deterministic(self):
        raw = "# Title\n\nSome *text* with `code`."
        assert normalize(raw) == normalize(raw)

    def test_keeps_other_punctuation(self):
        assert normalize("packets, routers.") == "packets, routers."
