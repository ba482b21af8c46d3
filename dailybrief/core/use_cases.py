"""
This module contains the application use cases for DailyBrief.

analyze_news runs one domain end to end: it pulls the article batch from an
ArticleSource, hands it to the rule-based analyzer, saves each resulting
insight to an InsightStore and sends a single batch notification.
run_daily_brief does that for the economy and IT domains concurrently.

The collaborators are Protocols so that file stores, HTTP clients or test
doubles can be swapped in without touching the workflow.
"""

import asyncio
from typing import Dict, Iterable, List, Optional, Protocol

from dailybrief.core.analyzers import DomainAnalyzer, get_analyzer
from dailybrief.core.entities import Article, Domain, Insight

from utils.logging_setup import get_logger
logger = get_logger(__name__, log_file="core.log")


class ArticleSource(Protocol):
    async def fetch_news(self, domain: Domain) -> List[Article]: ...


class InsightStore(Protocol):
    def save(self, insight: Insight) -> None: ...

    def find_by_domain(self, domain: Domain) -> List[Insight]: ...

    def find_by_id(self, insight_id: str) -> Optional[Insight]: ...

    def update(self, insight: Insight) -> None: ...


class Notifier(Protocol):
    def send(self, insight: Insight) -> None: ...

    def send_batch(self, insights: List[Insight]) -> None: ...


class AnalyzeNewsUseCase:
    def __init__(
        self,
        article_source: ArticleSource,
        insight_store: InsightStore,
        notifier: Notifier,
        analyzers: Optional[Dict[Domain, DomainAnalyzer]] = None,
    ):
        self.article_source = article_source
        self.insight_store = insight_store
        self.notifier = notifier
        self.analyzers = dict(analyzers or {})

    def analyzer_for(self, domain: Domain) -> DomainAnalyzer:
        if domain not in self.analyzers:
            self.analyzers[domain] = get_analyzer(domain)
        return self.analyzers[domain]

    async def execute(self, domain) -> List[Insight]:
        """
        1. Fetch articles for the domain
        2. Generate insights with the rule-based analyzer
        3. Save every insight
        4. Send one batch notification
        """
        domain = Domain(domain)
        tag = f"[{domain.value}]"
        try:
            logger.info(f"{tag} Starting analysis...")

            articles = await self.article_source.fetch_news(domain)
            logger.info(f"{tag} Fetched {len(articles)} articles")

            if not articles:
                logger.info(f"{tag} No articles found. Skipping analysis.")
                return []

            # The analyzer is pure CPU work; keep the event loop free.
            insights = await asyncio.to_thread(self.analyzer_for(domain).analyze, articles)
            logger.info(f"{tag} Generated {len(insights)} insights")

            if not insights:
                logger.info(f"{tag} No insights generated. Skipping save and notification.")
                return []

            for insight in insights:
                await asyncio.to_thread(self.insight_store.save, insight)
                logger.debug(f"{tag} Saved insight {insight.id}: {insight.title}")
            logger.info(f"{tag} Saved {len(insights)} insights")

            await asyncio.to_thread(self.notifier.send_batch, insights)
            logger.info(f"{tag} Sent batch notification")

            logger.info(f"{tag} Analysis completed successfully")
            return insights

        except Exception as e:
            logger.error(f"{tag} Analysis failed: {e}", exc_info=True)
            raise


async def run_daily_brief(use_case: AnalyzeNewsUseCase, domains: Iterable = (Domain.ECONOMY, Domain.IT)) -> Dict[Domain, List[Insight]]:
    """Analyze several domains concurrently; a failing domain fails the whole brief."""
    domains = [Domain(domain) for domain in domains]
    logger.info("=" * 50)
    logger.info(f"Daily brief started for: {', '.join(domain.value for domain in domains)}")

    results = await asyncio.gather(*(use_case.execute(domain) for domain in domains))

    brief = dict(zip(domains, results))
    total = sum(len(insights) for insights in brief.values())
    logger.info(f"Daily brief completed: {total} insights")
    logger.info("=" * 50)
    return brief
