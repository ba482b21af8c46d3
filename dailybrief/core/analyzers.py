"""
Rule-based domain analyzers.

A DomainAnalyzer runs its topic analyzers over one article batch and returns
the insights they produce:

    gate(batch >= min_batch_size)
      -> for each topic: filter -> gate(relevant >= min) -> detect
         -> extract causes/effects -> compose title/summary/explanation

Each topic analyzer is driven by a TopicRule from rules.py. Nothing here keeps
state between calls, so analyzers can be shared across threads and the same
batch always yields the same text.
"""

from typing import List, Optional, Sequence

from dailybrief.core.entities import (
    Article,
    Domain,
    EconomyInsight,
    EconomyInsightData,
    ImpactAssessment,
    ITInsight,
    ITInsightData,
    create_economy_insight,
    create_it_insight,
)
from dailybrief.core import phrases
from dailybrief.core.rules import (
    DIRECTION_DOMINANCE_RATIO,
    ECONOMY_TOPIC_RULES,
    MAX_LIST_ITEMS,
    MAX_SOURCE_URLS,
    MIN_BATCH_SIZE,
    PRODUCT_RELEASE_RULE,
    SECURITY_RULE,
    TECH_ADOPTION_RULE,
    TECH_DEPRECATION_RULE,
    EconomyTopicRule,
    ITTopicRule,
    TopicRule,
)
from dailybrief.core.signals import (
    assess_impact,
    dedupe,
    detect_affected,
    detect_direction,
    economy_priority,
    extract_change,
    extract_main_event,
    extract_statements,
    extract_tags,
    extract_technologies,
    extract_timing,
    filter_by_keywords,
    it_priority,
)

from utils.logging_setup import get_logger
logger = get_logger(__name__, log_file="core.log")


def source_urls(articles: Sequence[Article]) -> List[str]:
    return [article.link for article in articles[:MAX_SOURCE_URLS]]


class TopicAnalyzer:
    """Turns one TopicRule into at most one insight."""

    def __init__(self, rule: TopicRule, min_relevant_articles: Optional[int] = None):
        if min_relevant_articles is not None:
            rule = rule.model_copy(update={"min_relevant_articles": min_relevant_articles})
        self.rule = rule

    @property
    def name(self) -> str:
        return self.rule.id

    def relevant_articles(self, articles: Sequence[Article]) -> List[Article]:
        return filter_by_keywords(articles, self.rule.filter_keywords)

    def analyze(self, articles: Sequence[Article]):
        relevant = self.relevant_articles(articles)
        if len(relevant) < self.rule.min_relevant_articles:
            logger.debug(
                f"[{self.name}] {len(relevant)} relevant articles, "
                f"need {self.rule.min_relevant_articles}. Skipping."
            )
            return None
        return self.build(relevant)

    def build(self, relevant: List[Article]):
        raise NotImplementedError


class EconomyTopicAnalyzer(TopicAnalyzer):
    rule: EconomyTopicRule

    def __init__(
        self,
        rule: EconomyTopicRule,
        min_relevant_articles: Optional[int] = None,
        dominance_ratio: float = DIRECTION_DOMINANCE_RATIO,
    ):
        super().__init__(rule, min_relevant_articles)
        self.dominance_ratio = dominance_ratio

    def build(self, relevant: List[Article]) -> EconomyInsight:
        rule = self.rule
        direction = detect_direction(relevant, self.dominance_ratio)
        causes = extract_statements(relevant, rule.cause_keywords, rule.cause_template)
        effects = extract_statements(relevant, rule.effect_keywords, rule.effect_template)

        logger.debug(f"[{self.name}] direction={direction.value} causes={len(causes)} effects={len(effects)}")

        return create_economy_insight(
            title=phrases.economy_title(rule, direction, relevant),
            summary=phrases.economy_summary(rule, direction, relevant),
            easy_explanation=phrases.economy_explanation(rule.issue_type, direction, relevant),
            data=EconomyInsightData(
                issue_type=rule.issue_type,
                event=extract_main_event(relevant),
                causes=causes or [rule.cause_fallback],
                effects=effects or [rule.effect_fallback],
                direction=direction,
            ),
            priority=economy_priority(len(relevant), direction),
            tags=list(rule.tags),
            source_urls=source_urls(relevant),
        )


class ITTopicAnalyzer(TopicAnalyzer):
    rule: ITTopicRule

    def build(self, relevant: List[Article]) -> ITInsight:
        rule = self.rule
        impact = rule.fixed_impact or assess_impact(relevant)
        affected = list(rule.fixed_affected) if rule.fixed_affected else detect_affected(relevant)

        logger.debug(f"[{self.name}] impact={impact.value} affected={[party.value for party in affected]}")

        return create_it_insight(
            title=phrases.it_title(rule, relevant),
            summary=phrases.it_summary(rule, impact, relevant),
            easy_explanation=phrases.it_explanation(rule.change_type, relevant),
            data=ITInsightData(
                change_type=rule.change_type,
                change=extract_change(relevant),
                timing=rule.fixed_timing or extract_timing(relevant),
                affected=affected,
                impact=ImpactAssessment(
                    level=impact,
                    description=phrases.impact_description(impact, relevant),
                ),
                action_items=phrases.action_items(rule.change_type),
                technologies=extract_technologies(relevant),
            ),
            priority=rule.fixed_priority or it_priority(impact),
            tags=dedupe(extract_tags(relevant) + rule.extra_tags, MAX_LIST_ITEMS),
            source_urls=source_urls(relevant),
        )


def choose_tech_change(adoption_count: int, deprecation_count: int, adoption_min: int, deprecation_min: int) -> Optional[str]:
    """Pick "adoption" or "deprecation" for a batch, or None.

    Adoption wins a tie with deprecation as long as it meets its own minimum.
    """
    if adoption_count >= deprecation_count and adoption_count >= adoption_min:
        return "adoption"
    if deprecation_count >= deprecation_min:
        return "deprecation"
    return None


class TechChangeAnalyzer:
    """Adoption vs. deprecation: the side with more matches becomes the topic."""

    name = "tech_change"

    def __init__(self, adoption: ITTopicAnalyzer, deprecation: ITTopicAnalyzer):
        self.adoption = adoption
        self.deprecation = deprecation

    def analyze(self, articles: Sequence[Article]) -> Optional[ITInsight]:
        adopted = self.adoption.relevant_articles(articles)
        deprecated = self.deprecation.relevant_articles(articles)
        choice = choose_tech_change(
            len(adopted),
            len(deprecated),
            self.adoption.rule.min_relevant_articles,
            self.deprecation.rule.min_relevant_articles,
        )
        if choice == "adoption":
            return self.adoption.build(adopted)
        if choice == "deprecation":
            return self.deprecation.build(deprecated)
        logger.debug(f"[{self.name}] adoption={len(adopted)} deprecation={len(deprecated)}. Skipping.")
        return None


class DomainAnalyzer:
    """Runs a fixed list of topic analyzers over one article batch."""

    domain: Domain

    def __init__(self, topics: list, min_batch_size: int = MIN_BATCH_SIZE):
        self.topics = topics
        self.min_batch_size = min_batch_size

    def analyze(self, articles: Sequence[Article]) -> list:
        """
        Analyze a batch and return the generated insights (possibly empty).

        Too few articles is ordinary input, not an error: the result is an
        empty list.
        """
        articles = list(articles)
        if len(articles) < self.min_batch_size:
            logger.info(
                f"[{self.domain.value}] Only {len(articles)} articles "
                f"(minimum {self.min_batch_size}). No insights generated."
            )
            return []

        insights = []
        for topic in self.topics:
            insight = topic.analyze(articles)
            if insight is not None:
                logger.debug(f"[{self.domain.value}] {topic.name}: {insight.title}")
                insights.append(insight)

        logger.info(f"[{self.domain.value}] Generated {len(insights)} insights from {len(articles)} articles")
        return insights


class EconomyAnalyzer(DomainAnalyzer):
    domain = Domain.ECONOMY

    def __init__(
        self,
        rules: Sequence[EconomyTopicRule] = ECONOMY_TOPIC_RULES,
        min_batch_size: int = MIN_BATCH_SIZE,
        min_relevant_articles: Optional[int] = None,
        dominance_ratio: float = DIRECTION_DOMINANCE_RATIO,
    ):
        topics = [EconomyTopicAnalyzer(rule, min_relevant_articles, dominance_ratio) for rule in rules]
        super().__init__(topics, min_batch_size)


class ITAnalyzer(DomainAnalyzer):
    domain = Domain.IT

    def __init__(
        self,
        min_batch_size: int = MIN_BATCH_SIZE,
        min_relevant_articles: Optional[int] = None,
        min_security_articles: Optional[int] = None,
        min_tech_change_articles: Optional[int] = None,
    ):
        topics = [
            ITTopicAnalyzer(PRODUCT_RELEASE_RULE, min_relevant_articles),
            TechChangeAnalyzer(
                ITTopicAnalyzer(TECH_ADOPTION_RULE, min_tech_change_articles),
                ITTopicAnalyzer(TECH_DEPRECATION_RULE, min_tech_change_articles),
            ),
            ITTopicAnalyzer(SECURITY_RULE, min_security_articles),
        ]
        super().__init__(topics, min_batch_size)


ANALYZERS = {
    Domain.ECONOMY: EconomyAnalyzer,
    Domain.IT: ITAnalyzer,
}


def get_analyzer(domain, **settings) -> DomainAnalyzer:
    """Build the analyzer for a domain ("economy" or "it")."""
    return ANALYZERS[Domain(domain)](**settings)
