"""
Signal primitives shared by the topic analyzers.

All functions here are pure: they take an article batch (never mutated) and
return a fresh value. Matching is plain substring search over
"<title> <content>"; only the keyword filter is case-insensitive, the rest
match the vocabulary exactly as written.
"""

import re
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from dailybrief.core.entities import AffectedParty, Article, Direction, ImpactLevel, Priority
from dailybrief.core.rules import (
    AFFECTED_PARTY_WORDS,
    CRITICAL_IMPACT_WORDS,
    DEFAULT_CHANGE,
    DEFAULT_ECONOMY_EVENT,
    DEFAULT_SOURCE_LABEL,
    DEFAULT_TIMING,
    DIRECTION_DOMINANCE_RATIO,
    DOWN_WORDS,
    HIGH_IMPACT_WORDS,
    HIGH_PRIORITY_ARTICLE_COUNT,
    MAX_LIST_ITEMS,
    MAX_STATEMENTS,
    MEDIUM_PRIORITY_ARTICLE_COUNT,
    MODERATE_IMPACT_ARTICLE_COUNT,
    TAG_KEYWORDS,
    TECHNOLOGY_KEYWORDS,
    TIMING_RULES,
    TitleDetail,
    UP_WORDS,
)

_BRACKETED = re.compile(r"\[.*?\]")


def corpus(articles: Iterable[Article]) -> str:
    """Title and content of every article joined into one searchable string."""
    return " ".join(article.text for article in articles)


def titles(articles: Iterable[Article]) -> str:
    return " ".join(article.title for article in articles)


def contains_any(text: str, words: Iterable[str]) -> bool:
    return any(word in text for word in words)


def dedupe(items: Iterable[str], limit: Optional[int] = None) -> List[str]:
    """Drop repeats while keeping first-seen order, then cap."""
    result = list(dict.fromkeys(items))
    return result if limit is None else result[:limit]


def filter_by_keywords(articles: Sequence[Article], keywords: Sequence[str]) -> List[Article]:
    """Articles whose text contains at least one keyword, case-insensitively."""
    lowered = [keyword.lower() for keyword in keywords]
    return [
        article for article in articles
        if contains_any(article.text.lower(), lowered)
    ]


def count_direction_words(
    articles: Sequence[Article],
    up_words: Sequence[str] = UP_WORDS,
    down_words: Sequence[str] = DOWN_WORDS,
) -> Tuple[int, int]:
    """Count (up, down) vocabulary hits; each word counts once per article it appears in."""
    up_count = 0
    down_count = 0
    for article in articles:
        text = article.text
        up_count += sum(1 for word in up_words if word in text)
        down_count += sum(1 for word in down_words if word in text)
    return up_count, down_count


def classify_direction(up_count: int, down_count: int, ratio: float = DIRECTION_DOMINANCE_RATIO) -> Direction:
    if up_count > down_count * ratio:
        return Direction.UP
    if down_count > up_count * ratio:
        return Direction.DOWN
    return Direction.NEUTRAL


def detect_direction(articles: Sequence[Article], ratio: float = DIRECTION_DOMINANCE_RATIO) -> Direction:
    up_count, down_count = count_direction_words(articles)
    return classify_direction(up_count, down_count, ratio)


def assess_impact(articles: Sequence[Article]) -> ImpactLevel:
    """First matching rule wins: critical words, high-impact words, batch size, else minor."""
    text = corpus(articles).lower()
    if contains_any(text, CRITICAL_IMPACT_WORDS):
        return ImpactLevel.CRITICAL
    if contains_any(text, HIGH_IMPACT_WORDS):
        return ImpactLevel.SIGNIFICANT
    if len(articles) >= MODERATE_IMPACT_ARTICLE_COUNT:
        return ImpactLevel.MODERATE
    return ImpactLevel.MINOR


def extract_statements(
    articles: Sequence[Article],
    keywords: Sequence[str],
    template: str,
    limit: int = MAX_STATEMENTS,
) -> List[str]:
    """One templated sentence per factor keyword present in any article.

    Sentences follow the keyword order. Returns an empty list when nothing
    matches; the caller picks its own fallback.
    """
    statements: List[str] = []
    for keyword in keywords:
        if len(statements) >= limit:
            break
        if any(keyword in article.text for article in articles):
            statements.append(template.format(keyword=keyword))
    return statements


def rank_sources(articles: Sequence[Article], limit: int) -> List[str]:
    """Most frequent publishers first; ties keep first-seen order."""
    counts = Counter(article.source or DEFAULT_SOURCE_LABEL for article in articles)
    return [source for source, _ in counts.most_common(limit)]


def extract_title_detail(articles: Sequence[Article], detail: Optional[TitleDetail]) -> str:
    if detail is None:
        return ""
    text = titles(articles)
    if detail.pattern:
        match = re.search(detail.pattern, text)
        if match:
            return detail.template.format(match.group(0))
    for word in detail.words:
        if word in text:
            return detail.template.format(word)
    return ""


def detect_affected(articles: Sequence[Article]) -> List[AffectedParty]:
    text = corpus(articles)
    affected = [party for party, words in AFFECTED_PARTY_WORDS if contains_any(text, words)]
    return affected or [AffectedParty.ALL]


def match_vocabulary(articles: Sequence[Article], vocabulary: Sequence[str], limit: int = MAX_LIST_ITEMS) -> List[str]:
    text = corpus(articles)
    return dedupe((word for word in vocabulary if word in text), limit)


def extract_technologies(articles: Sequence[Article]) -> List[str]:
    return match_vocabulary(articles, TECHNOLOGY_KEYWORDS)


def extract_tags(articles: Sequence[Article]) -> List[str]:
    return match_vocabulary(articles, TAG_KEYWORDS)


def extract_timing(articles: Sequence[Article]) -> str:
    text = corpus(articles)
    for words, timing in TIMING_RULES:
        if contains_any(text, words):
            return timing
    return DEFAULT_TIMING


def extract_change(articles: Sequence[Article]) -> str:
    """Headline of the lead article with bracketed labels removed."""
    if not articles:
        return DEFAULT_CHANGE
    return _BRACKETED.sub("", articles[0].title).strip() or DEFAULT_CHANGE


def extract_main_event(articles: Sequence[Article]) -> str:
    if not articles:
        return DEFAULT_ECONOMY_EVENT
    return articles[0].title or DEFAULT_ECONOMY_EVENT


def economy_priority(article_count: int, direction: Direction) -> Priority:
    if article_count >= HIGH_PRIORITY_ARTICLE_COUNT and direction != Direction.NEUTRAL:
        return Priority.HIGH
    if article_count >= MEDIUM_PRIORITY_ARTICLE_COUNT:
        return Priority.MEDIUM
    return Priority.LOW


def it_priority(impact: ImpactLevel) -> Priority:
    if impact in (ImpactLevel.CRITICAL, ImpactLevel.SIGNIFICANT):
        return Priority.HIGH
    return Priority.MEDIUM
