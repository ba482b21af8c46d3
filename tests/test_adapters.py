import json
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from conftest import make_article
from dailybrief.adapters.article_source import (
    CompositeArticleSource,
    JsonArticleSource,
    normalize_title,
    remove_duplicates,
)
from dailybrief.adapters.insight_store import JsonInsightStore
from dailybrief.adapters.notifier import (
    LogNotifier,
    NullNotifier,
    build_notifier,
    format_batch_message,
    format_insight_message,
)
from dailybrief.core.analyzers import EconomyAnalyzer, ITAnalyzer
from dailybrief.core.entities import Domain, InsightStatus, update_insight_status
from dailybrief.core.exceptions import (
    ArticleSourceError,
    InsightNotFoundError,
    InsightStoreError,
    NotificationError,
)


@pytest.fixture
def economy_insight(exchange_rate_articles):
    return EconomyAnalyzer().analyze(exchange_rate_articles)[0]


@pytest.fixture
def it_insight(security_articles):
    return ITAnalyzer().analyze(security_articles)[0]


def write_articles(path, payload):
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return str(path)


class TestArticleSource:
    def test_normalize_title(self):
        assert normalize_title("  [속보] 환율,   급등!! ") == "속보 환율 급등"

    def test_remove_duplicates_by_link_and_title(self):
        articles = [
            make_article("환율 급등", index=0),
            make_article("다른 제목", index=1, link="https://news.example.com/0"),
            make_article("환율 급등!", index=2),
            make_article("금리 동결", index=3),
        ]
        assert [a.title for a in remove_duplicates(articles)] == ["환율 급등", "금리 동결"]

    @pytest.mark.asyncio
    async def test_json_source_sorts_and_dedupes(self, tmp_path):
        path = write_articles(tmp_path / "articles.json", {
            "economy": [
                {"title": "오래된 기사", "link": "https://a/1", "publishedAt": "2025-01-14T09:00:00"},
                {"title": "최신 기사", "link": "https://a/2", "publishedAt": "2025-01-15T09:00:00", "source": "연합뉴스"},
                {"title": "최신 기사", "link": "https://a/3", "publishedAt": "2025-01-15T08:00:00"},
            ],
            "it": [],
        })

        articles = await JsonArticleSource(path).fetch_news("economy")

        assert [a.link for a in articles] == ["https://a/2", "https://a/1"]
        assert articles[0].source == "연합뉴스"
        assert await JsonArticleSource(path).fetch_news(Domain.IT) == []

    @pytest.mark.asyncio
    async def test_json_source_mixes_offset_and_naive_dates(self, tmp_path):
        path = write_articles(tmp_path / "articles.json", {
            "it": [
                {"title": "UTC 기사", "link": "https://a/1", "publishedAt": "2020-01-01T00:00:00Z"},
                {"title": "날짜 없는 기사", "link": "https://a/2"},
                {"title": "naive 기사", "link": "https://a/3", "publishedAt": "2021-01-01T00:00:00"},
                {"title": "KST 기사", "link": "https://a/4", "publishedAt": "2021-01-01T06:00:00+09:00"},
            ],
        })

        articles = await JsonArticleSource(path).fetch_news(Domain.IT)

        assert [a.link for a in articles] == ["https://a/2", "https://a/3", "https://a/4", "https://a/1"]
        assert all(a.published_at.tzinfo is not None for a in articles)

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(ArticleSourceError):
            await JsonArticleSource(str(tmp_path / "missing.json")).fetch_news("economy")

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path):
        path = tmp_path / "articles.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ArticleSourceError):
            await JsonArticleSource(str(path)).fetch_news("economy")

    @pytest.mark.asyncio
    async def test_invalid_article(self, tmp_path):
        path = write_articles(tmp_path / "articles.json", {"economy": [{"title": "링크 없음"}]})
        with pytest.raises(ArticleSourceError):
            await JsonArticleSource(path).fetch_news("economy")

    @pytest.mark.asyncio
    async def test_composite_skips_failing_source(self, tmp_path):
        first = write_articles(tmp_path / "first.json", {
            "it": [{"title": "AI 도입", "link": "https://a/1", "publishedAt": "2025-01-15T09:00:00"}],
        })
        second = write_articles(tmp_path / "second.json", {
            "it": [
                {"title": "AI 도입", "link": "https://b/1", "publishedAt": "2025-01-15T07:00:00"},
                {"title": "보안 패치", "link": "https://b/2", "publishedAt": "2025-01-15T10:00:00"},
            ],
        })
        source = CompositeArticleSource([
            JsonArticleSource(first),
            JsonArticleSource(str(tmp_path / "missing.json")),
            JsonArticleSource(second),
        ])

        articles = await source.fetch_news("it")

        assert [a.link for a in articles] == ["https://b/2", "https://a/1"]


class TestInsightStore:
    def test_save_and_reload(self, tmp_path, economy_insight, it_insight):
        path = str(tmp_path / "store" / "insights.json")
        store = JsonInsightStore(path)
        store.save(economy_insight)
        store.save(it_insight)

        reloaded = JsonInsightStore(path)
        assert reloaded.get_count() == 2
        assert reloaded.find_by_id(economy_insight.id) == economy_insight
        assert reloaded.find_by_domain("it") == [it_insight]
        assert reloaded.find_by_id("missing") is None

    def test_file_keeps_korean_text(self, tmp_path, economy_insight):
        path = tmp_path / "insights.json"
        JsonInsightStore(str(path)).save(economy_insight)
        assert "환율" in path.read_text(encoding="utf-8")

    def test_update(self, tmp_path, economy_insight):
        path = str(tmp_path / "insights.json")
        store = JsonInsightStore(path)
        store.save(economy_insight)

        store.update(update_insight_status(economy_insight, InsightStatus.PUBLISHED))

        assert JsonInsightStore(path).find_by_id(economy_insight.id).status == InsightStatus.PUBLISHED

    def test_update_unknown_insight(self, tmp_path, economy_insight):
        store = JsonInsightStore(str(tmp_path / "insights.json"))
        with pytest.raises(InsightNotFoundError) as exc_info:
            store.update(economy_insight)
        assert isinstance(exc_info.value, InsightStoreError)

    def test_concurrent_saves_keep_every_insight(self, tmp_path, economy_insight, it_insight):
        path = str(tmp_path / "insights.json")
        store = JsonInsightStore(path)
        insights = [
            base.model_copy(update={"id": f"{base.domain}-{n}"})
            for n in range(100)
            for base in (economy_insight, it_insight)
        ]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(store.save, insights))

        reloaded = JsonInsightStore(path)
        assert reloaded.get_count() == 200
        assert len(reloaded.find_by_domain("economy")) == 100
        assert len(reloaded.find_by_domain("it")) == 100

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "insights.json"
        path.write_text("[]]", encoding="utf-8")
        with pytest.raises(InsightStoreError):
            JsonInsightStore(str(path))


class TestNotifier:
    def test_economy_message(self, economy_insight):
        message = format_insight_message(economy_insight)
        assert message.startswith(f"💰 {economy_insight.title}")
        assert "📊 이슈: 환율 1,450원 상승 마감" in message
        assert "📍 원인:\n  • 연준 관련 요인으로 인한 영향이 나타나고 있습니다" in message
        assert "📈 영향:" in message
        assert message.endswith("🟡 우선순위: medium")

    def test_it_message(self, it_insight):
        message = format_insight_message(it_insight)
        assert message.startswith("💻 📌 [보안]")
        assert "⏰ 시점: 보안 위협 증가로 즉각 대응 필요" in message
        assert "👥 대상: developers, users, enterprises" in message
        assert "✅ 액션:\n  • 시스템 보안 점검 즉시 실시" in message
        assert message.endswith("🔴 우선순위: high")

    def test_batch_message(self, economy_insight, it_insight):
        message = format_batch_message([it_insight, economy_insight], today=date(2025, 1, 15))
        lines = message.split("\n")
        assert lines[0] == "📰 Daily Brief Insights"
        assert lines[1] == "2025. 1. 15."
        assert "💰 경제: 1건" in lines
        assert "💻 IT: 1건" in lines
        assert "총 2개의 인사이트가 분석되었습니다." in lines
        assert lines[-2] == f"1. 💻 {it_insight.title}"
        assert lines[-1] == f"2. 💰 {economy_insight.title}"

    def test_batch_message_lists_top_three(self, economy_insight):
        message = format_batch_message([economy_insight] * 5, today=date(2025, 1, 15))
        assert message.count(economy_insight.title) == 3

    def test_build_notifier(self, economy_insight):
        assert isinstance(build_notifier("log"), LogNotifier)
        notifier = build_notifier("none")
        assert isinstance(notifier, NullNotifier)
        notifier.send(economy_insight)
        notifier.send_batch([economy_insight])
        with pytest.raises(NotificationError):
            build_notifier("slack")
