"""Errors raised by DailyBrief collaborators. The analysis core raises none of these."""


class DailyBriefError(Exception):
    """Base class for all DailyBrief errors."""


class ArticleSourceError(DailyBriefError):
    """Articles could not be loaded from a source."""


class InsightStoreError(DailyBriefError):
    """An insight could not be read from or written to the store."""


class InsightNotFoundError(InsightStoreError):
    def __init__(self, insight_id: str):
        super().__init__(f"Insight not found: {insight_id}")
        self.insight_id = insight_id


class NotificationError(DailyBriefError):
    """A notification could not be delivered."""
