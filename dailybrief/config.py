"""
Runtime configuration for DailyBrief.

Values come from the environment (a local .env is loaded first). The analysis
core never reads these directly; callers pass them into the analyzers so the
core stays a pure function of its input.
"""

import os
from dotenv import load_dotenv
load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# Adapter locations
ARTICLES_FILE = os.getenv("ARTICLES_FILE", "data/articles.json")
INSIGHTS_FILE = os.getenv("INSIGHTS_FILE", "data/insights.json")
NOTIFY_CHANNEL = os.getenv("NOTIFY_CHANNEL", "log")  # log | none

# Analysis thresholds
MIN_BATCH_SIZE = int(os.getenv("MIN_BATCH_SIZE", 5))
MIN_RELEVANT_ARTICLES = int(os.getenv("MIN_RELEVANT_ARTICLES", 3))
MIN_SECURITY_ARTICLES = int(os.getenv("MIN_SECURITY_ARTICLES", 2))
MIN_TECH_CHANGE_ARTICLES = int(os.getenv("MIN_TECH_CHANGE_ARTICLES", 2))
DIRECTION_DOMINANCE_RATIO = float(os.getenv("DIRECTION_DOMINANCE_RATIO", 1.5))


def analyzer_settings(domain: str) -> dict:
    """Constructor keyword arguments for the analyzer of a domain."""
    if domain == "economy":
        return {
            "min_batch_size": MIN_BATCH_SIZE,
            "min_relevant_articles": MIN_RELEVANT_ARTICLES,
            "dominance_ratio": DIRECTION_DOMINANCE_RATIO,
        }
    return {
        "min_batch_size": MIN_BATCH_SIZE,
        "min_relevant_articles": MIN_RELEVANT_ARTICLES,
        "min_security_articles": MIN_SECURITY_ARTICLES,
        "min_tech_change_articles": MIN_TECH_CHANGE_ARTICLES,
    }
