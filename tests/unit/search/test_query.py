"""Unit tests for weighted substring ranking."""

import pytest

from lesson_search.domain.model import Entry
from lesson_search.search.index import CorpusIndex
from lesson_search.search.query import is_degenerate, parse_terms, query, score_entries, score_entry


def _entry(order: int, *, chapter: str = "Chapter", subtitle: str = "sub", subject: str = "Subject") -> Entry:
    return Entry.create(
        subject_id="s",
        subject_title=subject,
        chapter_id=f"c{order}",
        chapter_title=chapter,
        part_number=1,
        subtitle=subtitle,
        locator=f"c{order}.md",
        corpus_order=order,
    )


@pytest.mark.unit
class TestParseTerms:
    def test_splits_on_whitespace_and_lowercases(self):
        assert parse_terms("  Network   ROUTING\tip ") == ["network", "routing", "ip"]

    def test_empty_query_has_no_terms(self):
        assert parse_terms("") == []
        assert parse_terms("   ") == []


@pytest.mark.unit
class TestIsDegenerate:
    def test_short_queries_are_degenerate(self):
        assert is_degenerate("")
        assert is_degenerate("a")
        assert is_degenerate("  a  ")

    def test_two_characters_are_enough(self):
        assert not is_degenerate("ip")


@pytest.mark.unit
class TestScoring:
    """Tests for score_entry and score_entries."""

    def test_title_composite_hit_scores_ten(self):
        entry = _entry(0, chapter="Routing Tables")
        assert score_entry(entry, ["routing"]) == 10

    def test_subject_title_only_counts_as_body_hit(self):
        # Subject title is part of search_text but not the title composite
        entry = _entry(0, subject="Networking")
        assert score_entry(entry, ["networking"]) == 1

    def test_body_hit_scores_one(self):
        entry = _entry(0)
        entry.enrich("packets traverse routers")
        assert score_entry(entry, ["packets"]) == 1

    def test_scores_sum_over_terms(self):
        entry = _entry(0, chapter="Routing Tables", subtitle="ip protocols")
        entry.enrich("packets everywhere")
        assert score_entry(entry, ["routing", "ip", "packets", "missing"]) == 21

    def test_partial_word_matches_count(self):
        entry = _entry(0, chapter="Networking")
        assert score_entry(entry, ["work"]) == 10

    def test_repeated_term_scores_each_time(self):
        entry = _entry(0, chapter="Routing")
        assert score_entry(entry, ["routing", "routing"]) == 20

    def test_custom_weights(self):
        entry = _entry(0, chapter="Routing")
        entry.enrich("packets")
        assert score_entry(entry, ["routing", "packets"], title_weight=5, body_weight=2) == 7

    def test_score_entries_exposes_scores(self):
        entries = [_entry(0, chapter="Routing"), _entry(1, chapter="Other")]
        scored = score_entries(entries, "routing")
        assert [(item.entry.corpus_order, item.score) for item in scored] == [(0, 10)]


@pytest.mark.unit
class TestQuery:
    """Tests for query function."""

    def test_degenerate_queries_return_nothing(self, index):
        assert query(index, "") == []
        assert query(index, "a") == []
        assert query(index, " n ") == []

    def test_empty_index_returns_nothing(self):
        assert query(CorpusIndex(), "network") == []

    def test_query_without_letters_does_not_raise(self, index):
        assert query(index, "?? ** ((") == []

    def test_zero_score_entries_are_dropped(self, index):
        assert query(index, "zzzz") == []

    def test_title_hit_ranks_before_body_hit(self):
        body_only = _entry(0, chapter="Storage", subtitle="disks")
        body_only.enrich("a quick note on caching")
        title_hit = _entry(1, chapter="Caching", subtitle="basics")
        results = query([body_only, title_hit], "caching")
        assert results == [title_hit, body_only]

    def test_ties_break_by_corpus_order(self):
        entries = [_entry(2, chapter="Alpha"), _entry(0, chapter="Alpha"), _entry(1, chapter="Alpha")]
        results = query(entries, "alpha")
        assert [entry.corpus_order for entry in results] == [0, 1, 2]

    def test_results_capped_at_twelve(self):
        entries = [_entry(order, chapter="Same") for order in range(20)]
        results = query(entries, "same")
        assert len(results) == 12
        assert [entry.corpus_order for entry in results] == list(range(12))

    def test_custom_cap(self):
        entries = [_entry(order, chapter="Same") for order in range(5)]
        assert len(query(entries, "same", max_results=3)) == 3

    def test_case_insensitive(self, index):
        assert query(index, "NETWORK") == query(index, "network")

    def test_fresh_call_recomputes(self, index):
        key = next(iter(index)).document_key
        before = query(index, "computers")
        index.enrich(key, "Computers talk to each other")
        after = query(index, "computers")
        assert before == []
        assert [entry.document_key for entry in after] == [key]
