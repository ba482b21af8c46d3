"""
Article sources for DailyBrief.

JsonArticleSource reads a pre-fetched article dump shaped like
{"economy": [...], "it": [...]}. CompositeArticleSource merges several
sources. Both hand the analyzers a newest-first batch with duplicates removed
by link and by normalized title, since the same story is often syndicated
under different URLs.
"""

import asyncio
import json
import re
from pathlib import Path
from typing import List, Sequence

from pydantic import ValidationError

from dailybrief.core.entities import Article, Domain
from dailybrief.core.exceptions import ArticleSourceError

from utils.logging_setup import get_logger
logger = get_logger(__name__, log_file="adapters.log")

_NON_WORD = re.compile(r"[^\w\s가-힣]")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    title = _NON_WORD.sub("", title.lower())
    return _WHITESPACE.sub(" ", title).strip()


def remove_duplicates(articles: Sequence[Article]) -> List[Article]:
    """Keep the first article per link and per normalized title."""
    seen_links = set()
    seen_titles = set()
    result = []
    for article in articles:
        if article.link in seen_links:
            continue
        normalized = normalize_title(article.title)
        if normalized in seen_titles:
            continue
        seen_links.add(article.link)
        seen_titles.add(normalized)
        result.append(article)
    return result


def newest_first(articles: Sequence[Article]) -> List[Article]:
    return sorted(articles, key=lambda article: article.published_at, reverse=True)


class JsonArticleSource:
    def __init__(self, articles_file: str):
        self.articles_file = Path(articles_file)

    def _load(self, domain: Domain) -> List[Article]:
        if not self.articles_file.exists():
            raise ArticleSourceError(f"Articles file not found: {self.articles_file}")
        try:
            with open(self.articles_file, 'r', encoding="utf-8") as f:
                data = json.load(f)
            raw = data.get(domain.value, [])
            articles = [Article.model_validate(item) for item in raw]
        except (json.JSONDecodeError, ValidationError) as e:
            raise ArticleSourceError(f"Invalid articles file {self.articles_file}: {e}") from e
        logger.info(f"📰 Loaded {len(articles)} {domain.value} articles from {self.articles_file}")
        return articles

    async def fetch_news(self, domain) -> List[Article]:
        articles = await asyncio.to_thread(self._load, Domain(domain))
        return remove_duplicates(newest_first(articles))


class CompositeArticleSource:
    """Fetches from every source concurrently; a failing source is logged and skipped."""

    def __init__(self, sources: list):
        self.sources = sources

    async def fetch_news(self, domain) -> List[Article]:
        results = await asyncio.gather(
            *(source.fetch_news(domain) for source in self.sources),
            return_exceptions=True,
        )
        articles: List[Article] = []
        for source, result in zip(self.sources, results):
            if isinstance(result, Exception):
                logger.error(f"❌ Failed to fetch from {type(source).__name__}: {result}")
                continue
            articles.extend(result)

        merged = remove_duplicates(newest_first(articles))
        logger.info(f"🔎 Merged {len(articles)} articles into {len(merged)} unique articles")
        return merged
