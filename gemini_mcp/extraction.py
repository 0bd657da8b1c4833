"""
Heuristic extraction of structure from free-text model replies.

Gemini is asked for formatted answers but nothing guarantees it complies,
so every function here is a best-effort surface-pattern parser: pure text
in, plain data out, no I/O. Tools assemble their typed results from these.

Ordering rule shared by the frequency-ranked helpers (consensus themes,
key topics): higher count first, equal counts keep first-appearance order.
"""

from collections import Counter
import re
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel

from gemini_mcp.logging_utils import get_logger

logger = get_logger(__name__)

# Common function words never reported as themes or topics
STOP_WORDS = frozenset({
    "that", "this", "with", "from", "have", "will", "would", "could",
    "should", "about", "which", "their", "there", "these", "those",
    "been", "being", "were", "when", "where", "while", "after", "before",
    "using", "make", "more", "into", "over", "such", "also", "some",
    "than", "them", "then", "very", "well", "only", "just", "even",
})

BULLET_MARKERS = ("-", "*", "•")

# Placeholder: no relevance signal is derived from the reply yet
PLACEHOLDER_RELEVANCE_SCORE = 0.7

EXCERPT_MAX_CHARS = 200
FALLBACK_EXCERPT_CHARS = 100
MIN_QUOTE_CHARS = 20
MAX_CONSENSUS_THEMES = 10
MAX_KEY_TOPICS = 5
MIN_KEYWORD_LENGTH = 4

EMOTION_KEYWORDS = ("joy", "sadness", "anger", "fear", "surprise", "trust")
DEFAULT_EMOTION_INTENSITY = 0.5

RANKING_MODES = ("relevance", "recency", "popularity")

_SCORE_RE = re.compile(r"(\d+\.?\d*)/10|score[:\s]+(\d+\.?\d*)", re.IGNORECASE)
_IDEA_RE = re.compile(r"^\s*(\d+)\.?\s*(.+)$")
_THEME_TOKEN_RE = re.compile(r"\b[a-zA-Z]{4,}\b")
_QUOTE_RE = re.compile(r'"([^"]{%d,})"' % MIN_QUOTE_CHARS)


# ============================================================================
# Result fragments
# ============================================================================

class Idea(BaseModel):
    id: int
    text: str


class ConsensusTheme(BaseModel):
    theme: str
    frequency: int
    related_ideas: List[int]


class Source(BaseModel):
    """Caller-supplied document to search across."""
    id: str
    title: str
    content: str


class SourceResult(BaseModel):
    source_id: str
    source_title: str
    excerpt: str
    relevance_score: float


class Citation(BaseModel):
    source_id: str
    source_title: str
    quote: str


class CodeIssue(BaseModel):
    severity: str
    category: str
    description: str
    location: Optional[str] = None


class Emotion(BaseModel):
    name: str
    intensity: float


# ============================================================================
# Line-oriented field helpers
# ============================================================================

def extract_field(text: str, keyword: str, default: Optional[str] = None) -> Optional[str]:
    """
    Value of the first `Label: value` line mentioning keyword.

    The first line whose lowercase form contains keyword wins; the result is
    whatever follows its first colon, trimmed (empty when there is no colon).
    Returns default when no line mentions keyword.

    Example:
        >>> extract_field("Sentiment: positive\\nTone: formal", "tone")
        'formal'
    """
    for line in text.splitlines():
        if keyword in line.lower():
            _, _, value = line.partition(":")
            return value.strip()
    return default


def extract_score(text: str, default: Optional[float] = None) -> Optional[float]:
    """
    First `<n>/10` or `score: <n>` number in text (case-insensitive).

    Example:
        >>> extract_score("Quality score: 8.5/10")
        8.5
    """
    match = _SCORE_RE.search(text)
    if match is None:
        return default
    number = match.group(1) or match.group(2)
    try:
        return float(number)
    except (TypeError, ValueError):
        return default


def extract_list(text: str, keyword: str) -> List[str]:
    """Bulleted lines (-, *, •) that mention keyword, markers stripped."""
    items = []
    for line in text.splitlines():
        stripped = line.strip()
        if keyword not in stripped.lower() or not stripped.startswith(BULLET_MARKERS):
            continue
        items.append(stripped.lstrip("".join(BULLET_MARKERS)).strip())
    return items


def extract_answer(text: str) -> str:
    """`Answer:` line if present, otherwise the first three lines joined."""
    lines = text.splitlines()
    for line in lines:
        if line.lower().startswith("answer:"):
            _, _, value = line.partition(":")
            return value.strip()
    return " ".join(lines[:3]).strip()


def extract_issues(text: str) -> List[CodeIssue]:
    """Every line talking about an issue or problem becomes a CodeIssue."""
    issues = []
    for line in text.splitlines():
        lowered = line.lower()
        if "issue" in lowered or "problem" in lowered:
            issues.append(CodeIssue(
                severity="medium",
                category="general",
                description=line.strip(),
            ))
    return issues


def extract_emotions(text: str) -> List[Emotion]:
    """Known emotion words mentioned anywhere in text, in a fixed order."""
    lowered = text.lower()
    return [
        Emotion(name=name, intensity=DEFAULT_EMOTION_INTENSITY)
        for name in EMOTION_KEYWORDS
        if name in lowered
    ]


def count_words(text: str) -> int:
    return len(text.split())


# ============================================================================
# Ideas and consensus themes
# ============================================================================

def parse_ideas(text: str) -> List[Idea]:
    """
    Split a numbered list into ideas.

    A line like `3. Some idea` starts a new idea; ids are assigned 1, 2, 3...
    in order of appearance regardless of the number the model wrote. Any
    other non-empty line continues the latest idea (joined with one space).
    Text before the first numbered line is ignored.
    """
    ideas: List[Idea] = []
    for line in text.splitlines():
        match = _IDEA_RE.match(line)
        if match:
            ideas.append(Idea(id=len(ideas) + 1, text=match.group(2).strip()))
        elif line.strip() and ideas:
            last = ideas[-1]
            last.text = f"{last.text} {line.strip()}"
    return ideas


def consensus_threshold(idea_count: int) -> int:
    """ceil(0.3 * idea_count), in integer arithmetic."""
    return (3 * idea_count + 9) // 10


def extract_consensus_themes(ideas: Sequence[Idea]) -> List[ConsensusTheme]:
    """
    Keywords shared by at least 30% of the ideas.

    Tokens are lowercase alphabetic words of 4+ letters, counted once per
    idea. Stop words are dropped. At most MAX_CONSENSUS_THEMES themes are
    returned, most widespread first.
    """
    keyword_to_ideas: Dict[str, List[int]] = {}
    for idea in ideas:
        seen_in_idea = set()
        for word in _THEME_TOKEN_RE.findall(idea.text.lower()):
            if word in seen_in_idea:
                continue
            seen_in_idea.add(word)
            keyword_to_ideas.setdefault(word, []).append(idea.id)

    threshold = consensus_threshold(len(ideas))
    themes = [
        ConsensusTheme(theme=word, frequency=len(idea_ids), related_ideas=idea_ids)
        for word, idea_ids in keyword_to_ideas.items()
        if word not in STOP_WORDS and len(idea_ids) >= threshold
    ]
    # sorted() is stable, so ties stay in first-appearance order
    themes = sorted(themes, key=lambda t: -t.frequency)
    return themes[:MAX_CONSENSUS_THEMES]


# ============================================================================
# Summaries
# ============================================================================

def _strip_non_alpha_edges(word: str) -> str:
    start, end = 0, len(word)
    while start < end and not word[start].isalpha():
        start += 1
    while end > start and not word[end - 1].isalpha():
        end -= 1
    return word[start:end]


def extract_key_topics(text: str) -> List[str]:
    """Most frequent non-stop words (4+ letters, seen at least twice), top 5."""
    counts: Counter = Counter()
    for raw in text.split():
        word = _strip_non_alpha_edges(raw).lower()
        if len(word) >= MIN_KEYWORD_LENGTH:
            counts[word] += 1

    # Counter preserves insertion order and most_common() sorts stably
    topics = [
        word for word, count in counts.most_common()
        if count >= 2 and word not in STOP_WORDS
    ]
    return topics[:MAX_KEY_TOPICS]


# ============================================================================
# Multi-source search
# ============================================================================

def extract_excerpt(text: str, source: Source) -> str:
    """First blank-line paragraph naming the source, else the source's opening."""
    title = source.title.lower()
    for paragraph in text.split("\n\n"):
        if title in paragraph.lower():
            return paragraph[:EXCERPT_MAX_CHARS]
    return source.content[:FALLBACK_EXCERPT_CHARS]


def extract_results(text: str, sources: Iterable[Source]) -> List[SourceResult]:
    """One SourceResult per source whose title or id the reply mentions."""
    lowered = text.lower()
    results = []
    for source in sources:
        if source.title.lower() in lowered or source.id.lower() in lowered:
            results.append(SourceResult(
                source_id=source.id,
                source_title=source.title,
                excerpt=extract_excerpt(text, source),
                relevance_score=PLACEHOLDER_RELEVANCE_SCORE,
            ))
    return results


def extract_citations(text: str, sources: Sequence[Source]) -> List[Citation]:
    """
    Quoted passages (20+ chars) traced back to the source that contains them.

    Each quote is attributed to the first source whose content contains it,
    exactly or ignoring case. Quotes found in no source are dropped.
    """
    citations = []
    for quote in _QUOTE_RE.findall(text):
        lowered_quote = quote.lower()
        for source in sources:
            if quote in source.content or lowered_quote in source.content.lower():
                citations.append(Citation(
                    source_id=source.id,
                    source_title=source.title,
                    quote=quote,
                ))
                break
    return citations


def rank_results(
    results: Sequence[SourceResult],
    ranking: str = "relevance",
    min_relevance: Optional[float] = None,
    max_results: Optional[int] = None,
) -> List[SourceResult]:
    """
    Filter, order and cap search results.

    Results below min_relevance are dropped first, the rest are ordered by
    relevance descending, then truncated to max_results. The recency and
    popularity modes are accepted but sources carry no date or popularity
    data, so they order by relevance too.
    """
    if ranking not in RANKING_MODES:
        raise ValueError(f"Unknown ranking mode: {ranking}")

    ranked = list(results)
    if min_relevance is not None:
        ranked = [r for r in ranked if r.relevance_score >= min_relevance]

    if ranking != "relevance":
        logger.debug(f"Ranking mode '{ranking}' has no signal; ordering by relevance")
    ranked.sort(key=lambda r: r.relevance_score, reverse=True)

    if max_results is not None:
        ranked = ranked[:max(max_results, 0)]
    return ranked
