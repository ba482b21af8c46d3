import pytest

from conftest import make_article, make_batch
from dailybrief.core import phrases
from dailybrief.core.entities import Direction, EconomyIssueType, ImpactLevel, ITChangeType
from dailybrief.core.rules import (
    EQUITY_MARKET_RULE,
    EXCHANGE_RATE_RULE,
    INTEREST_RATE_RULE,
    PRODUCT_RELEASE_RULE,
    SECURITY_RULE,
)

HEADER = "💡 쉽게 이해하기\n\n"


class TestPhraseBankMechanics:
    def test_render_clauses(self):
        paragraph = ("A ", phrases.Clause(phrases.has("x"), "yes ", "no "), "B")
        assert phrases.render(paragraph, "x") == "A yes B"
        assert phrases.render(paragraph, "y") == "A no B"

    def test_pick_variant_first_match_wins(self):
        variants = [
            (phrases.has("a"), ("first",)),
            (phrases.has("b"), ("second",)),
        ]
        assert phrases.pick_variant(variants, "a b", ("fallback",)) == "first"
        assert phrases.pick_variant(variants, "b", ("fallback",)) == "second"
        assert phrases.pick_variant(variants, "c", ("fallback",)) == "fallback"
        assert phrases.pick_variant(None, "a", ("fallback",)) == "fallback"

    def test_matching_phrases_limit(self):
        bank = [(phrases.has("a"), "A"), (phrases.has("b"), "B"), (phrases.has("c"), "C")]
        assert phrases.matching_phrases(bank, "c b a", 2) == ["A", "B"]


class TestTitles:
    def test_economy_title(self, exchange_rate_articles):
        title = phrases.economy_title(EXCHANGE_RATE_RULE, Direction.UP, exchange_rate_articles)
        assert title == "📌 환율 상승세, 1,450원 돌파 [연합뉴스·한국경제·매일경제 등 6건]"

    def test_interest_title_with_policy_word(self):
        articles = make_batch([("한은 기준금리 동결", ""), ("금리 전망", "")])
        title = phrases.economy_title(INTEREST_RATE_RULE, Direction.NEUTRAL, articles)
        assert title == "📌 금리 변동성 동결 [연합뉴스 등 2건]"

    def test_equity_title_without_detail(self):
        articles = make_batch([("증시 하락", "")], sources=["한국경제"])
        title = phrases.economy_title(EQUITY_MARKET_RULE, Direction.DOWN, articles)
        assert title == "📌 증시 하락세 [한국경제 등 1건]"

    def test_it_title_picks_most_specific_technology(self):
        articles = make_batch([("GitHub Copilot 업데이트", ""), ("ChatGPT 출시", "")])
        assert phrases.it_title(PRODUCT_RELEASE_RULE, articles) == "📌 [제품] ChatGPT [연합뉴스 등 2건]"

    def test_source_suffix_without_sources(self):
        assert phrases.source_suffix([]) == " [0건]"


class TestSummaries:
    def test_economy_summary_lists_two_themes(self, exchange_rate_articles):
        summary = phrases.economy_summary(EXCHANGE_RATE_RULE, Direction.UP, exchange_rate_articles)
        assert summary == (
            "환율 관련 6개 뉴스가 보도되었습니다. "
            "미국 통화정책, 물가 상황 등의 영향으로 환율이(가) 상승세를 보이고 있으며, "
            "이는 국내 경제와 투자자들에게 중요한 영향을 미칠 것으로 분석됩니다."
        )

    def test_economy_summary_fallback(self):
        articles = make_batch([("환율 소식", "")])
        summary = phrases.economy_summary(EXCHANGE_RATE_RULE, Direction.NEUTRAL, articles)
        assert "다양한 요인으로 환율이(가) 변동성을 보이고 있으며" in summary

    def test_it_summary(self):
        articles = make_batch([("Python 3.13 출시", "AWS 지원"), ("React 업데이트", "")])
        summary = phrases.it_summary(PRODUCT_RELEASE_RULE, ImpactLevel.SIGNIFICANT, articles)
        assert summary.startswith("제품 출시 관련 2개 뉴스가 보도되었습니다. ")
        assert "React, Python 등의 기술과 관련하여 개발자와 기업들이 주목해야 할 중요한 변화가" in summary

    def test_it_summary_without_technologies(self):
        articles = make_batch([("보안 사고", "")])
        summary = phrases.it_summary(SECURITY_RULE, ImpactLevel.MINOR, articles)
        assert "IT 업계에서 관심을 가질 만한 흥미로운 변화가" in summary


class TestEconomyExplanations:
    def test_exchange_up_with_optional_clauses(self):
        articles = make_batch([("환율 상승", "수입 물가와 미국 금리")])
        text = phrases.economy_explanation(EconomyIssueType.EXCHANGE_RATE, Direction.UP, articles)
        assert text.startswith(HEADER + "달러 환율이 오른다는 것은")
        assert "수입 제품 가격이 오르고" in text
        assert text.endswith("주로 미국의 금리가 오르면서 투자자들이 달러를 더 선호하게 되었기 때문입니다.")

    def test_exchange_up_without_clauses(self):
        articles = make_batch([("환율 상승", "")])
        text = phrases.economy_explanation(EconomyIssueType.EXCHANGE_RATE, Direction.UP, articles)
        assert "수입 제품 가격이 오르고" not in text
        assert text.endswith("다양한 대외 경제 요인들이 복합적으로 작용한 결과입니다.")

    def test_interest_up_mentions_inflation(self):
        articles = make_batch([("금리 인상", "물가 상승")])
        text = phrases.economy_explanation(EconomyIssueType.INTEREST_RATE, Direction.UP, articles)
        assert "주로 물가 상승을 잡기 위해" in text
        assert text.endswith("투자자들의 주의가 필요합니다.")

    def test_equity_up_broad_rally_variant(self):
        articles = make_batch([("코스피 코스닥 동반 상승", "삼성 중소형주 강세")])
        text = phrases.economy_explanation(EconomyIssueType.EQUITY_MARKET, Direction.UP, articles)
        assert text.startswith(HEADER + "주식시장이 전반적으로 상승세를 보이고 있습니다. 대형주를 중심으로")
        assert "중소형주도 함께 오르면서" in text

    def test_equity_up_narrow_variant(self):
        articles = make_batch([("코스피 상승", "외국인 순매수")])
        text = phrases.economy_explanation(EconomyIssueType.EQUITY_MARKET, Direction.UP, articles)
        assert "주식시장이 상승하고 있습니다. 외국인 투자자들의 순매수가 시장 상승을 이끌고" in text

    def test_equity_down(self):
        articles = make_batch([("증시 하락", "금리 부담과 실적 부진")])
        text = phrases.economy_explanation(EconomyIssueType.EQUITY_MARKET, Direction.DOWN, articles)
        assert "금리 상승 우려나 기업 실적 부진, 부정적인 투자 심리가 하락의 주요 원인입니다." in text

    @pytest.mark.parametrize("issue_type", list(EconomyIssueType))
    @pytest.mark.parametrize("direction", list(Direction))
    def test_every_combination_has_text(self, issue_type, direction):
        text = phrases.economy_explanation(issue_type, direction, make_batch([("뉴스", "")]))
        assert text.startswith(HEADER)
        assert len(text) > len(HEADER)

    def test_unmapped_issue_type_uses_fallback(self):
        text = phrases.economy_explanation(EconomyIssueType.COMMODITY, Direction.UP, make_batch([("유가", "")]))
        assert text == HEADER + "".join(phrases.ECONOMY_FALLBACK_EXPLANATION)


class TestITExplanations:
    def test_ai_dev_tool_release(self):
        articles = make_batch([("GitHub Copilot 출시", "AI 코딩")])
        text = phrases.it_explanation(ITChangeType.PRODUCT_RELEASE, articles)
        assert text.startswith(HEADER + "AI 기반 개발 도구가 새롭게 출시되었습니다.")

    def test_cloud_release(self):
        articles = make_batch([("AWS 신규 리전 출시", "")])
        text = phrases.it_explanation(ITChangeType.PRODUCT_RELEASE, articles)
        assert text.startswith(HEADER + "클라우드 서비스에 새로운 기능이 추가되었습니다.")

    def test_security_clauses(self):
        with_both = make_batch([("랜섬웨어 공격", "취약점 악용")])
        text = phrases.it_explanation(ITChangeType.SECURITY, with_both)
        assert "랜섬웨어는 컴퓨터의 파일을 암호화해서" in text
        assert "소프트웨어의 취약점은" in text

        plain = phrases.it_explanation(ITChangeType.SECURITY, make_batch([("해킹 사고", "")]))
        assert "랜섬웨어는" not in plain
        assert "취약점은 해커가" not in plain

    def test_unmapped_change_type_uses_fallback(self):
        text = phrases.it_explanation(ITChangeType.ORGANIZATION, make_batch([("조직 개편", "")]))
        assert text == HEADER + "".join(phrases.IT_FALLBACK_EXPLANATION)


def test_impact_description_counts_articles():
    articles = [make_article("a", index=i) for i in range(4)]
    assert phrases.impact_description(ImpactLevel.MODERATE, articles) == (
        "4개 기사에서 보도되었으며, 중장기적으로 영향을 미칠 수 있습니다."
    )


def test_action_items():
    assert phrases.action_items(ITChangeType.SECURITY)[0] == "시스템 보안 점검 즉시 실시"
    assert phrases.action_items(ITChangeType.OTHER) == ["추가 정보 수집 및 모니터링"]
