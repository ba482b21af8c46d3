"""
Core entities for DailyBrief.

- Article is the immutable input record handed over by the acquisition layer.
- EconomyInsight answers "what happened and why" (cause -> effect).
- ITInsight answers "what changed and why it matters" (change -> impact).

Both insight kinds share the base Insight fields and are created in "draft"
status by the factories below. The analysis core never mutates an insight;
update_insight_status returns a copy for the stores that need it.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Domain(str, Enum):
    ECONOMY = "economy"
    IT = "it"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class InsightStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class ImpactLevel(str, Enum):
    CRITICAL = "critical"
    SIGNIFICANT = "significant"
    MODERATE = "moderate"
    MINOR = "minor"


class AffectedParty(str, Enum):
    DEVELOPERS = "developers"
    USERS = "users"
    ENTERPRISES = "enterprises"
    ALL = "all"


class EconomyIssueType(str, Enum):
    EXCHANGE_RATE = "exchange_rate"
    INTEREST_RATE = "interest_rate"
    EQUITY_MARKET = "equity_market"
    COMMODITY = "commodity"
    POLICY = "policy"
    OTHER = "other"


class ITChangeType(str, Enum):
    PRODUCT_RELEASE = "product_release"
    POLICY_CHANGE = "policy_change"
    TECH_ADOPTION = "tech_adoption"
    TECH_DEPRECATION = "tech_deprecation"
    SECURITY = "security"
    ORGANIZATION = "organization"
    OTHER = "other"


class Article(BaseModel):
    """A single news item as delivered by a feed."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    link: str
    content: str = ""
    published_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), alias="publishedAt")
    source: str = ""

    @field_validator("published_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Feeds mix offset and naive timestamps; naive ones are taken as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def text(self) -> str:
        return f"{self.title} {self.content}"


class EconomyInsightData(BaseModel):
    issue_type: EconomyIssueType
    event: str = Field(..., description="What happened?")
    causes: List[str] = Field(default_factory=list, max_length=5, description="Why did it happen?")
    effects: List[str] = Field(default_factory=list, max_length=5, description="What follows from it?")
    direction: Direction = Direction.NEUTRAL
    metrics: Optional[Dict[str, Union[str, float, int]]] = None


class ImpactAssessment(BaseModel):
    level: ImpactLevel
    description: str


class ITInsightData(BaseModel):
    change_type: ITChangeType
    change: str = Field(..., description="What changed?")
    timing: str = Field(..., description="Why now?")
    affected: List[AffectedParty] = Field(default_factory=lambda: [AffectedParty.ALL])
    impact: ImpactAssessment
    action_items: Optional[List[str]] = Field(default=None, max_length=5)
    technologies: Optional[List[str]] = Field(default=None, max_length=5)


class BaseInsight(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    summary: str
    easy_explanation: Optional[str] = None
    analysis_date: datetime = Field(default_factory=datetime.now)
    status: InsightStatus = InsightStatus.DRAFT
    priority: Priority = Priority.MEDIUM
    tags: List[str] = Field(default_factory=list, max_length=5)
    source_urls: List[str] = Field(default_factory=list, max_length=3)


class EconomyInsight(BaseInsight):
    domain: Literal["economy"] = "economy"
    data: EconomyInsightData


class ITInsight(BaseInsight):
    domain: Literal["it"] = "it"
    data: ITInsightData


Insight = Annotated[Union[EconomyInsight, ITInsight], Field(discriminator="domain")]


def _generate_id(domain: Domain) -> str:
    return f"{domain.value}-{uuid.uuid4().hex}"


def create_economy_insight(
    title: str,
    summary: str,
    data: EconomyInsightData,
    easy_explanation: Optional[str] = None,
    priority: Priority = Priority.MEDIUM,
    tags: Optional[List[str]] = None,
    source_urls: Optional[List[str]] = None,
) -> EconomyInsight:
    return EconomyInsight(
        id=_generate_id(Domain.ECONOMY),
        title=title,
        summary=summary,
        easy_explanation=easy_explanation,
        data=data,
        priority=priority,
        tags=tags or [],
        source_urls=source_urls or [],
    )


def create_it_insight(
    title: str,
    summary: str,
    data: ITInsightData,
    easy_explanation: Optional[str] = None,
    priority: Priority = Priority.MEDIUM,
    tags: Optional[List[str]] = None,
    source_urls: Optional[List[str]] = None,
) -> ITInsight:
    return ITInsight(
        id=_generate_id(Domain.IT),
        title=title,
        summary=summary,
        easy_explanation=easy_explanation,
        data=data,
        priority=priority,
        tags=tags or [],
        source_urls=source_urls or [],
    )


def update_insight_status(insight, status: InsightStatus):
    """Return a copy of the insight with a new lifecycle status."""
    return insight.model_copy(update={"status": InsightStatus(status)})
