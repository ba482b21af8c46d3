"""
Notification adapters.

The message builders produce plain text that any chat transport can carry.
LogNotifier "delivers" by writing the message to the log, which is what the
scheduled job uses until a chat channel is configured; NullNotifier drops
everything.
"""

from datetime import date
from typing import List, Optional

from dailybrief.core.entities import Domain, EconomyInsight, Insight, ITInsight, Priority
from dailybrief.core.exceptions import NotificationError

from utils.logging_setup import get_logger
logger = get_logger(__name__, log_file="adapters.log")

DOMAIN_MARKERS = {
    Domain.ECONOMY.value: "💰",
    Domain.IT.value: "💻",
}

PRIORITY_MARKERS = {
    Priority.HIGH: "🔴",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "⚪",
}

TOP_INSIGHTS_IN_BATCH = 3


def _bullets(items: List[str]) -> str:
    return "\n".join(f"  • {item}" for item in items)


def format_insight_message(insight: Insight) -> str:
    lines = [f"{DOMAIN_MARKERS[insight.domain]} {insight.title}", "", insight.summary, ""]

    if isinstance(insight, EconomyInsight):
        data = insight.data
        lines.append(f"📊 이슈: {data.event}")
        lines.append(f"📍 원인:\n{_bullets(data.causes)}")
        if data.effects:
            lines.append(f"📈 영향:\n{_bullets(data.effects)}")
    elif isinstance(insight, ITInsight):
        data = insight.data
        lines.append(f"🔄 변화: {data.change}")
        lines.append(f"⏰ 시점: {data.timing}")
        lines.append(f"👥 대상: {', '.join(party.value for party in data.affected)}")
        lines.append(f"💥 영향: {data.impact.description}")
        if data.action_items:
            lines.append(f"✅ 액션:\n{_bullets(data.action_items)}")

    lines.append("")
    lines.append(f"{PRIORITY_MARKERS[insight.priority]} 우선순위: {insight.priority.value}")
    return "\n".join(lines)


def format_batch_message(insights: List[Insight], today: Optional[date] = None) -> str:
    today = today or date.today()
    economy_count = sum(1 for i in insights if i.domain == Domain.ECONOMY.value)
    it_count = sum(1 for i in insights if i.domain == Domain.IT.value)

    lines = [
        "📰 Daily Brief Insights",
        f"{today.year}. {today.month}. {today.day}.",
        "",
        f"💰 경제: {economy_count}건",
        f"💻 IT: {it_count}건",
        "",
        f"총 {len(insights)}개의 인사이트가 분석되었습니다.",
        "",
        "주요 인사이트:",
    ]
    for index, insight in enumerate(insights[:TOP_INSIGHTS_IN_BATCH], start=1):
        lines.append(f"{index}. {DOMAIN_MARKERS[insight.domain]} {insight.title}")
    return "\n".join(lines)


class LogNotifier:
    def send(self, insight: Insight):
        logger.info("📨 Insight notification\n" + format_insight_message(insight))

    def send_batch(self, insights: List[Insight]):
        logger.info("📨 Batch notification\n" + format_batch_message(insights))


class NullNotifier:
    def send(self, insight: Insight):
        logger.debug(f"Notification dropped: {insight.id}")

    def send_batch(self, insights: List[Insight]):
        logger.debug(f"Batch notification dropped ({len(insights)} insights)")


def build_notifier(channel: str):
    if channel == "log":
        return LogNotifier()
    if channel == "none":
        return NullNotifier()
    raise NotificationError(f"Unknown notification channel: {channel}")
