"""
Topic rule tables and vocabularies for the rule-based analyzers.

Every topic the analyzers know about is a TopicRule record here: which
keywords pull an article into the topic, how many relevant articles are needed
before an insight is produced, and which factor keywords feed the cause/effect
statements. Adding a topic means adding a record, not a branch.

Keyword lists are ordered; extracted statements, tags and technologies follow
list order, not the order they appear in the articles.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from dailybrief.core.entities import (
    AffectedParty,
    Direction,
    EconomyIssueType,
    ImpactLevel,
    ITChangeType,
    Priority,
)

# Gates
MIN_BATCH_SIZE = 5
MIN_RELEVANT_ARTICLES = 3
MIN_SECURITY_ARTICLES = 2
MIN_TECH_CHANGE_ARTICLES = 2

# A direction wins only when its count exceeds the other side by this factor.
DIRECTION_DOMINANCE_RATIO = 1.5

# Caps
MAX_STATEMENTS = 5
MAX_LIST_ITEMS = 5
MAX_SOURCE_URLS = 3
TITLE_SOURCE_LIMIT = 3

# Economy priority ladder
HIGH_PRIORITY_ARTICLE_COUNT = 10
MEDIUM_PRIORITY_ARTICLE_COUNT = 5

# Batch size at which an IT topic without impact vocabulary counts as moderate
MODERATE_IMPACT_ARTICLE_COUNT = 5

TITLE_MARKER = "📌"
DEFAULT_SOURCE_LABEL = "기타"

CAUSE_TEMPLATE = "{keyword} 관련 요인으로 인한 영향이 나타나고 있습니다"
EFFECT_TEMPLATE = "{keyword}에 상당한 영향을 미칠 것으로 예상됩니다"


class TitleDetail(BaseModel):
    """How to pull a short detail fragment out of the relevant article titles.

    `pattern` is a regex whose first match is used; otherwise the first entry
    of `words` present in the titles is used. The fragment is rendered through
    `template`.
    """
    model_config = ConfigDict(frozen=True)

    pattern: Optional[str] = None
    words: List[str] = Field(default_factory=list)
    template: str = "{}"


class TopicRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    filter_keywords: List[str]
    min_relevant_articles: int = MIN_RELEVANT_ARTICLES
    cause_keywords: List[str] = Field(default_factory=list)
    effect_keywords: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class EconomyTopicRule(TopicRule):
    issue_type: EconomyIssueType
    cause_template: str = CAUSE_TEMPLATE
    effect_template: str = EFFECT_TEMPLATE
    cause_fallback: str
    effect_fallback: str
    title_detail: Optional[TitleDetail] = None


class ITTopicRule(TopicRule):
    change_type: ITChangeType
    summary_topic: str
    # Fixed values override the detected ones (security is always critical).
    fixed_impact: Optional[ImpactLevel] = None
    fixed_timing: Optional[str] = None
    fixed_affected: Optional[List[AffectedParty]] = None
    fixed_priority: Optional[Priority] = None
    extra_tags: List[str] = Field(default_factory=list)


# ─────────────────────────────────────────────
# Economy
# ─────────────────────────────────────────────
EXCHANGE_RATE_RULE = EconomyTopicRule(
    id="exchange_rate",
    label="환율",
    issue_type=EconomyIssueType.EXCHANGE_RATE,
    filter_keywords=["환율", "달러", "원화", "엔화", "위안화", "유로"],
    cause_keywords=["미국 금리", "연준", "Fed", "중동", "지정학", "경상수지", "무역수지", "중국 경기"],
    effect_keywords=["수입 물가", "수출 기업", "외화 부채", "해외여행", "물가", "인플레이션"],
    cause_fallback="환율 변동성이 증가하고 있습니다",
    effect_fallback="경제 전반에 걸쳐 영향을 미칠 것으로 예상됩니다",
    title_detail=TitleDetail(pattern=r"\d{1,},?\d{0,3}원", template=", {} 돌파"),
    tags=["환율", "달러", "경제"],
)

INTEREST_RATE_RULE = EconomyTopicRule(
    id="interest_rate",
    label="금리",
    issue_type=EconomyIssueType.INTEREST_RATE,
    filter_keywords=["금리", "기준금리", "연준", "Fed", "한국은행", "통화정책"],
    cause_keywords=["인플레이션", "물가", "경기", "고용", "성장률"],
    effect_keywords=["대출", "예금", "부동산", "주식", "투자", "소비"],
    cause_fallback="통화정책 변화가 나타나고 있습니다",
    effect_fallback="금융시장 전반에 영향을 미칠 것으로 보입니다",
    title_detail=TitleDetail(words=["동결", "인상", "인하"], template=" {}"),
    tags=["금리", "통화정책", "경제"],
)

EQUITY_MARKET_RULE = EconomyTopicRule(
    id="equity_market",
    label="증시",
    issue_type=EconomyIssueType.EQUITY_MARKET,
    filter_keywords=["증시", "주가", "코스피", "KOSPI", "코스닥", "나스닥", "S&P"],
    cause_keywords=["실적", "경기", "금리", "외국인", "기관", "반도체", "기술주"],
    effect_keywords=["투자자", "개인", "기업가치", "시가총액", "자산"],
    cause_fallback="시장 변동성이 증가하고 있습니다",
    effect_fallback="투자 심리에 영향을 미칠 것으로 보입니다",
    title_detail=TitleDetail(pattern=r"코스피\s*\d{1,},?\d{0,3}", template=", {}"),
    tags=["증시", "주식", "투자"],
)

ECONOMY_TOPIC_RULES: List[EconomyTopicRule] = [
    EXCHANGE_RATE_RULE,
    INTEREST_RATE_RULE,
    EQUITY_MARKET_RULE,
]

UP_WORDS = ["상승", "급등", "오름", "증가", "강세", "호조", "플러스"]
DOWN_WORDS = ["하락", "급락", "떨어", "감소", "약세", "부진", "마이너스"]

DIRECTION_LABELS = {
    Direction.UP: "상승세",
    Direction.DOWN: "하락세",
    Direction.NEUTRAL: "변동성",
}

# ─────────────────────────────────────────────
# IT
# ─────────────────────────────────────────────
PRODUCT_RELEASE_RULE = ITTopicRule(
    id="product_release",
    label="제품",
    summary_topic="제품 출시",
    change_type=ITChangeType.PRODUCT_RELEASE,
    filter_keywords=["출시", "발표", "공개", "론칭", "업데이트", "버전", "릴리즈"],
)

TECH_ADOPTION_RULE = ITTopicRule(
    id="tech_adoption",
    label="기술",
    summary_topic="기술 도입",
    change_type=ITChangeType.TECH_ADOPTION,
    filter_keywords=["도입", "채택", "활용", "적용", "확대"],
    min_relevant_articles=MIN_TECH_CHANGE_ARTICLES,
)

TECH_DEPRECATION_RULE = ITTopicRule(
    id="tech_deprecation",
    label="기술",
    summary_topic="기술 폐기",
    change_type=ITChangeType.TECH_DEPRECATION,
    filter_keywords=["폐기", "중단", "종료", "지원 중단", "deprecated"],
    min_relevant_articles=MIN_TECH_CHANGE_ARTICLES,
)

SECURITY_RULE = ITTopicRule(
    id="security",
    label="보안",
    summary_topic="보안 이슈",
    change_type=ITChangeType.SECURITY,
    filter_keywords=["보안", "해킹", "취약점", "침해", "유출", "랜섬웨어", "사이버"],
    min_relevant_articles=MIN_SECURITY_ARTICLES,
    fixed_impact=ImpactLevel.CRITICAL,
    fixed_timing="보안 위협 증가로 즉각 대응 필요",
    fixed_affected=[AffectedParty.DEVELOPERS, AffectedParty.USERS, AffectedParty.ENTERPRISES],
    fixed_priority=Priority.HIGH,
    extra_tags=["보안", "긴급"],
)

CRITICAL_IMPACT_WORDS = ["긴급", "심각", "위기", "중단", "마비"]
HIGH_IMPACT_WORDS = ["혁신", "혁명", "획기적", "급증", "폭발", "대규모"]

AFFECTED_PARTY_WORDS: List[Tuple[AffectedParty, List[str]]] = [
    (AffectedParty.DEVELOPERS, ["개발자", "프로그래머", "엔지니어"]),
    (AffectedParty.USERS, ["사용자", "고객", "소비자"]),
    (AffectedParty.ENTERPRISES, ["기업", "회사", "조직"]),
]

TECHNOLOGY_KEYWORDS = [
    "AI", "GPT", "ChatGPT", "Claude", "LLM",
    "React", "Vue", "Angular", "TypeScript", "JavaScript",
    "Python", "Java", "Go", "Rust",
    "AWS", "Azure", "GCP", "Kubernetes", "Docker",
    "GitHub", "GitLab", "Copilot",
]

TAG_KEYWORDS = [
    "AI", "개발도구", "클라우드", "보안", "프론트엔드", "백엔드",
    "DevOps", "데이터", "모바일", "웹", "API", "SaaS",
]

# Technologies eligible for the title, most specific first
TITLE_TECH_KEYWORDS = [
    "ChatGPT", "GPT", "Claude", "GitHub Copilot", "Copilot",
    "TypeScript", "React", "AWS", "Azure", "Docker", "Kubernetes",
]

SUMMARY_TECH_KEYWORDS = [
    "AI", "GPT", "ChatGPT", "Claude", "GitHub", "Copilot", "React",
    "TypeScript", "JavaScript", "Python", "AWS", "Azure", "Docker", "Kubernetes",
]

TIMING_RULES: List[Tuple[List[str], str]] = [
    (["시장", "수요"], "시장 수요 증가에 대응"),
    (["경쟁", "선점"], "경쟁 우위 확보를 위한 전략적 시점"),
]
DEFAULT_TIMING = "기술 발전에 따른 자연스러운 변화"
DEFAULT_CHANGE = "IT 분야 변화"
DEFAULT_ECONOMY_EVENT = "경제 이슈 발생"
