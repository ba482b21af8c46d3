"""
This script runs one daily brief: it loads the pre-fetched articles, analyzes the economy and IT
batches, stores the generated insights and sends the batch notification.
Scheduling is left to cron (or any other scheduler) calling this script.
To run it, use `python -m scripts.run_brief` or `python -m scripts.run_brief --domain it` from the root of the project.
"""

import argparse
import asyncio
import sys

from dailybrief import config
from dailybrief.adapters.article_source import JsonArticleSource
from dailybrief.adapters.insight_store import JsonInsightStore
from dailybrief.adapters.notifier import build_notifier
from dailybrief.core.analyzers import get_analyzer
from dailybrief.core.entities import Domain
from dailybrief.core.exceptions import DailyBriefError
from dailybrief.core.use_cases import AnalyzeNewsUseCase, run_daily_brief

from utils.logging_setup import get_logger
logger = get_logger(__name__, log_file="scripts.log")


def build_use_case() -> AnalyzeNewsUseCase:
    analyzers = {
        domain: get_analyzer(domain, **config.analyzer_settings(domain.value))
        for domain in Domain
    }
    return AnalyzeNewsUseCase(
        article_source=JsonArticleSource(config.ARTICLES_FILE),
        insight_store=JsonInsightStore(config.INSIGHTS_FILE),
        notifier=build_notifier(config.NOTIFY_CHANNEL),
        analyzers=analyzers,
    )


async def main(domains) -> int:
    logger.info(f"🗞️ Articles: {config.ARTICLES_FILE} | Insights: {config.INSIGHTS_FILE}")
    try:
        use_case = build_use_case()
        brief = await run_daily_brief(use_case, domains)
    except DailyBriefError as e:
        logger.error(f"❌ Daily brief failed: {e}")
        return 1

    for domain, insights in brief.items():
        for insight in insights:
            logger.info(f"✅ [{domain.value}] {insight.priority.value:<6} {insight.title}")
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the DailyBrief analysis once.")
    parser.add_argument(
        "--domain",
        choices=[domain.value for domain in Domain],
        action="append",
        help="Domain to analyze (repeatable). Defaults to all domains.",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    sys.exit(asyncio.run(main(args.domain or list(Domain))))
