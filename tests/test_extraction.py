"""
Tests for gemini_mcp/extraction.py - heuristic parsing of model replies.

Pure functions only: no client, no event loop.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gemini_mcp.extraction import (
    DEFAULT_EMOTION_INTENSITY,
    EXCERPT_MAX_CHARS,
    MAX_CONSENSUS_THEMES,
    PLACEHOLDER_RELEVANCE_SCORE,
    STOP_WORDS,
    Idea,
    Source,
    SourceResult,
    consensus_threshold,
    count_words,
    extract_answer,
    extract_citations,
    extract_consensus_themes,
    extract_emotions,
    extract_field,
    extract_issues,
    extract_key_topics,
    extract_list,
    extract_results,
    extract_score,
    parse_ideas,
    rank_results,
)


def _result(score: float, source_id: str = "s") -> SourceResult:
    return SourceResult(
        source_id=source_id,
        source_title=f"Title {source_id}",
        excerpt="...",
        relevance_score=score,
    )


# ============================================================================
# Line-oriented field helpers
# ============================================================================

class TestExtractField:

    def test_value_after_colon(self):
        assert extract_field("Sentiment: positive\nTone: formal", "tone") == "formal"

    def test_first_matching_line_wins(self):
        text = "Overall sentiment: mixed\nSentiment: positive"
        assert extract_field(text, "sentiment") == "mixed"

    def test_case_insensitive_match(self):
        assert extract_field("COMPLEXITY: high", "complexity") == "high"

    def test_line_without_colon_yields_empty(self):
        assert extract_field("The structure is linear", "structure", "fallback") == ""

    def test_no_match_returns_default(self):
        assert extract_field("nothing here", "verdict", "moderately similar") == "moderately similar"
        assert extract_field("nothing here", "verdict") is None


class TestExtractScore:

    def test_slash_ten(self):
        assert extract_score("Quality score: 8.5/10") == 8.5

    def test_score_colon(self):
        assert extract_score("Score: 7") == 7.0

    def test_case_insensitive(self):
        assert extract_score("SCORE 6.5 overall") == 6.5

    def test_first_match_wins(self):
        assert extract_score("Readability: 9/10, later 3/10") == 9.0

    def test_no_match_returns_default(self):
        assert extract_score("no numbers", 5.0) == 5.0
        assert extract_score("no numbers") is None


class TestExtractList:

    def test_bulleted_lines_with_keyword(self):
        text = (
            "- Theme: growth\n"
            "* theme: resilience\n"
            "• Theme of loss\n"
            "Theme without bullet\n"
            "- unrelated bullet"
        )
        assert extract_list(text, "theme") == ["Theme: growth", "theme: resilience", "Theme of loss"]

    def test_leading_whitespace_allowed(self):
        assert extract_list("   - Suggestion: cache results", "suggestion") == ["Suggestion: cache results"]

    def test_empty_when_nothing_matches(self):
        assert extract_list("plain text", "pattern") == []


class TestExtractAnswer:

    def test_answer_line(self):
        text = "Intro\nAnswer: The sky is blue.\nMore"
        assert extract_answer(text) == "The sky is blue."

    def test_answer_line_case_insensitive(self):
        assert extract_answer("ANSWER: yes") == "yes"

    def test_fallback_first_three_lines(self):
        assert extract_answer("one\ntwo\nthree\nfour") == "one two three"

    def test_fallback_short_text(self):
        assert extract_answer("only line") == "only line"


class TestExtractIssuesAndEmotions:

    def test_issue_lines(self):
        text = "Issue: unchecked input\nAll good here\nA problem with locking"
        issues = extract_issues(text)
        assert [i.description for i in issues] == ["Issue: unchecked input", "A problem with locking"]
        assert all(i.severity == "medium" and i.category == "general" for i in issues)
        assert all(i.location is None for i in issues)

    def test_emotions_in_fixed_order(self):
        emotions = extract_emotions("Some fear and a lot of JOY, little trust")
        assert [e.name for e in emotions] == ["joy", "fear", "trust"]
        assert all(e.intensity == DEFAULT_EMOTION_INTENSITY for e in emotions)

    def test_no_emotions(self):
        assert extract_emotions("flat statement") == []


class TestCountWords:

    def test_whitespace_tokens(self):
        assert count_words("one  two\nthree\tfour") == 4
        assert count_words("") == 0


# ============================================================================
# Ideas and consensus themes
# ============================================================================

class TestParseIdeas:

    def test_sequential_ids_regardless_of_written_numbers(self):
        text = "\n".join(f"{n * 7}. Idea number {n}" for n in range(1, 6))
        ideas = parse_ideas(text)
        assert [i.id for i in ideas] == [1, 2, 3, 4, 5]
        assert ideas[0].text == "Idea number 1"

    @pytest.mark.parametrize("count", [1, 10, 50])
    def test_n_numbered_lines_give_n_ideas(self, count):
        text = "\n".join(f"{n}. Idea {n}" for n in range(1, count + 1))
        ideas = parse_ideas(text)
        assert len(ideas) == count
        assert [i.id for i in ideas] == list(range(1, count + 1))

    def test_continuation_line_appends(self):
        ideas = parse_ideas("1. First idea\n   continues here\n2. Second idea")
        assert ideas[0].text == "First idea continues here"
        assert ideas[1].text == "Second idea"

    def test_preamble_ignored(self):
        ideas = parse_ideas("Here are some ideas:\n\n1. Alpha\n2. Beta")
        assert [i.text for i in ideas] == ["Alpha", "Beta"]

    def test_number_without_dot(self):
        ideas = parse_ideas("1 Alpha")
        assert ideas == [Idea(id=1, text="Alpha")]

    def test_no_numbered_lines(self):
        assert parse_ideas("just prose\nmore prose") == []


class TestConsensusThemes:

    def _ideas(self, texts):
        return [Idea(id=n, text=t) for n, t in enumerate(texts, start=1)]

    def test_threshold_integer_ceiling(self):
        assert consensus_threshold(10) == 3
        assert consensus_threshold(1) == 1
        assert consensus_threshold(4) == 2
        assert consensus_threshold(0) == 0

    def test_token_in_three_of_ten_ideas_is_a_theme(self):
        texts = [f"Plan {word}" for word in "abcdefghij"]
        texts[0] = "Gamify onboarding flows"
        texts[3] = "Gamify the billing page"
        texts[7] = "Gamify support replies"
        themes = extract_consensus_themes(self._ideas(texts))
        gamify = [t for t in themes if t.theme == "gamify"]
        assert len(gamify) == 1
        assert gamify[0].frequency == 3
        assert gamify[0].related_ideas == [1, 4, 8]

    def test_token_in_two_of_ten_ideas_is_not_a_theme(self):
        texts = [f"Plan {word}" for word in "abcdefghij"]
        texts[0] = "Gamify onboarding flows"
        texts[3] = "Gamify the billing page"
        themes = extract_consensus_themes(self._ideas(texts))
        assert "gamify" not in [t.theme for t in themes]

    def test_stop_words_never_themes(self):
        ideas = self._ideas(["this would help", "this would work", "this would scale"])
        themes = extract_consensus_themes(ideas)
        assert {"this", "would"}.isdisjoint(t.theme for t in themes)

    def test_counted_once_per_idea(self):
        themes = extract_consensus_themes(self._ideas(["cache cache cache", "other text"]))
        cache = next(t for t in themes if t.theme == "cache")
        assert cache.frequency == 1
        assert cache.related_ideas == [1]

    def test_sorted_by_frequency_ties_by_first_appearance(self):
        ideas = self._ideas([
            "zebra apple",
            "apple mango zebra",
            "mango zebra",
        ])
        themes = extract_consensus_themes(ideas)
        assert [t.theme for t in themes] == ["zebra", "apple", "mango"]
        assert [t.frequency for t in themes] == [3, 2, 2]

    def test_at_most_ten_themes(self):
        words = ["".join(chr(97 + (n + k) % 26) for k in range(5)) for n in range(15)]
        text = " ".join(words)
        themes = extract_consensus_themes(self._ideas([text, text]))
        assert len(themes) == MAX_CONSENSUS_THEMES

    def test_short_tokens_ignored(self):
        themes = extract_consensus_themes(self._ideas(["use api now", "use api now"]))
        assert themes == []


# ============================================================================
# Summaries
# ============================================================================

class TestKeyTopics:

    def test_frequent_words(self):
        text = (
            "Machine learning and artificial intelligence are important technologies. "
            "Learning algorithms enable intelligent systems. Machine learning wins."
        )
        topics = extract_key_topics(text)
        assert topics[0] == "learning"
        assert "machine" in topics

    def test_punctuation_stripped_and_lowercased(self):
        assert extract_key_topics("Cache, cache! (CACHE)") == ["cache"]

    def test_single_occurrence_excluded(self):
        assert extract_key_topics("unique words appear once") == []

    def test_stop_words_filtered(self):
        text = "this this that that with with should should"
        assert extract_key_topics(text) == []
        assert "this" in STOP_WORDS

    def test_top_five_ties_by_first_appearance(self):
        words = ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot"]
        text = " ".join(words * 2)
        assert extract_key_topics(text) == words[:5]


# ============================================================================
# Multi-source search
# ============================================================================

class TestSearchExtraction:

    @pytest.fixture
    def sources(self):
        return [
            Source(id="doc-1", title="Rust Book", content="Ownership rules govern memory without a collector."),
            Source(id="doc-2", title="Python Guide", content="Python uses reference counting plus a cycle collector."),
            Source(id="doc-3", title="Go Tour", content="Goroutines are cheap."),
        ]

    def test_results_for_mentioned_sources(self, sources):
        text = "Answer: both\n\nThe Rust Book explains ownership.\n\nSee doc-2 for details."
        results = extract_results(text, sources)
        assert [r.source_id for r in results] == ["doc-1", "doc-2"]
        assert all(r.relevance_score == PLACEHOLDER_RELEVANCE_SCORE for r in results)

    def test_excerpt_from_paragraph_naming_title(self, sources):
        text = "Intro\n\nThe rust book explains ownership.\n\nOther"
        results = extract_results(text, sources)
        assert results[0].excerpt == "The rust book explains ownership."

    def test_excerpt_truncated(self, sources):
        text = "Rust Book " + "x" * 500
        results = extract_results(text, sources)
        assert len(results[0].excerpt) == EXCERPT_MAX_CHARS

    def test_excerpt_falls_back_to_source_content(self, sources):
        # Mentioned by id only, so no paragraph contains the title
        results = extract_results("Look at doc-3.", sources)
        assert results[0].excerpt == "Goroutines are cheap."

    def test_citations_attributed_to_containing_source(self, sources):
        text = 'It says "reference counting plus a cycle collector" and "this quote is not in any source".'
        citations = extract_citations(text, sources)
        assert len(citations) == 1
        assert citations[0].source_id == "doc-2"
        assert citations[0].quote == "reference counting plus a cycle collector"

    def test_citations_case_insensitive(self, sources):
        citations = extract_citations('"OWNERSHIP RULES GOVERN MEMORY"', sources)
        assert [c.source_id for c in citations] == ["doc-1"]

    def test_short_quotes_ignored(self, sources):
        assert extract_citations('"Goroutines"', sources) == []


class TestRankResults:

    def test_filter_sort_truncate(self):
        results = [_result(s, str(n)) for n, s in enumerate([0.9, 0.3, 0.7, 0.95, 0.1])]
        ranked = rank_results(results, min_relevance=0.5, max_results=2)
        assert [r.relevance_score for r in ranked] == [0.95, 0.9]

    def test_no_filters_sorts_descending(self):
        ranked = rank_results([_result(0.2), _result(0.8), _result(0.5)])
        assert [r.relevance_score for r in ranked] == [0.8, 0.5, 0.2]

    def test_stable_for_equal_scores(self):
        results = [_result(0.7, "a"), _result(0.7, "b"), _result(0.7, "c")]
        assert [r.source_id for r in rank_results(results)] == ["a", "b", "c"]

    @pytest.mark.parametrize("mode", ["recency", "popularity"])
    def test_fallback_modes_order_by_relevance(self, mode):
        ranked = rank_results([_result(0.1), _result(0.6)], ranking=mode)
        assert [r.relevance_score for r in ranked] == [0.6, 0.1]

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError):
            rank_results([], ranking="random")
