"""
This is the FastAPI application that exposes the DailyBrief analyzers over HTTP.
"""

from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from dailybrief import config
from dailybrief.adapters.insight_store import JsonInsightStore
from dailybrief.core.analyzers import get_analyzer
from dailybrief.core.entities import Article, Domain
from dailybrief.core.exceptions import InsightStoreError

from utils.logging_setup import get_logger
logger = get_logger(__name__, log_file="api_v1.log")

app = FastAPI(title="DailyBrief API", version="1.0.0")


class AnalyzeRequest(BaseModel):
    articles: List[Article]


# welcome endpoint
@app.get("/")
async def root():
    return {
        "message": "Welcome to DailyBrief API",
        "endpoints": {
            "analyze": "/api/v1/analyze/{domain}",
            "insights": "/api/v1/insights",
            "health": "/health"
        }
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "service": "dailybrief-api"}


@app.post("/api/v1/analyze/{domain}")
def analyze(domain: str, request: AnalyzeRequest):
    """
    Run the rule-based analyzer for one domain over the posted articles.

    Nothing is stored; the generated insights are returned as-is. Fewer
    articles than the batch minimum simply yields an empty list.
    """
    try:
        domain = Domain(domain)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown domain: {domain}")

    logger.info(f"📥 Analyze request: {domain.value}, {len(request.articles)} articles")
    analyzer = get_analyzer(domain, **config.analyzer_settings(domain.value))
    insights = analyzer.analyze(request.articles)

    return {
        "domain": domain.value,
        "count": len(insights),
        "insights": [insight.model_dump(mode="json") for insight in insights],
    }


# endpoint to query stored insights
@app.get("/api/v1/insights")
def get_insights(
    domain: Optional[str] = None,
    limit: int = Query(50, ge=1, le=100),
):
    """
    Retrieve stored insights.

    - **domain**: "economy" or "it" (all domains when omitted)
    - **limit**: Maximum number of insights to return (1-100)
    """
    try:
        store = JsonInsightStore(config.INSIGHTS_FILE)
        if domain:
            insights = store.find_by_domain(Domain(domain))
        else:
            insights = store.all()
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown domain: {domain}")
    except InsightStoreError as e:
        logger.error(f"Error fetching insights: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch insights"})

    insights = insights[:limit]
    return {
        "count": len(insights),
        "insights": [insight.model_dump(mode="json") for insight in insights],
    }
