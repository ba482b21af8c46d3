from datetime import datetime, timedelta

import pytest

from dailybrief.core.entities import Article

BASE_TIME = datetime(2025, 1, 15, 9, 0, 0)


def make_article(title, content="", source="연합뉴스", index=0, link=None):
    return Article(
        title=title,
        content=content,
        link=link or f"https://news.example.com/{index}",
        published_at=BASE_TIME - timedelta(hours=index),
        source=source,
    )


def make_batch(rows, sources=None):
    """rows: list of (title, content) tuples."""
    sources = sources or ["연합뉴스"]
    return [
        make_article(title, content, source=sources[i % len(sources)], index=i)
        for i, (title, content) in enumerate(rows)
    ]


@pytest.fixture
def filler_articles():
    """Articles that match no topic rule."""
    return make_batch([
        ("날씨 맑음", "전국이 대체로 맑겠습니다"),
        ("스포츠 소식", "야구 경기 결과"),
        ("문화 행사", "주말 공연 안내"),
        ("교통 정보", "고속도로 정체"),
        ("생활 정보", "장보기 팁"),
    ])


@pytest.fixture
def exchange_rate_articles():
    """6 articles on the exchange rate: 4 mention a rise, 1 a fall."""
    return make_batch(
        [
            ("환율 1,450원 상승 마감", "달러 강세 지속"),
            ("원달러 환율 상승", "연준 금리 결정 앞두고"),
            ("환율 상승 압력", "수입 물가 부담"),
            ("환율 상승에 수출 기업 웃는다", "해외 매출 확대"),
            ("환율 하락 전환 가능성", "외환 당국 개입"),
            ("환율 전망", "시장 관망"),
        ],
        sources=["연합뉴스", "연합뉴스", "한국경제", "매일경제", "한국경제", "연합뉴스"],
    )


@pytest.fixture
def security_articles():
    """3 security articles plus 2 unrelated ones: a batch of exactly 5."""
    return make_batch(
        [
            ("랜섬웨어 공격으로 보안 비상", "병원 시스템 피해"),
            ("보안 업계, 랜섬웨어 경고", "백업 필요"),
            ("기업 보안 점검 강화", "랜섬웨어 대응"),
            ("스포츠 소식", "야구 경기 결과"),
            ("문화 행사", "주말 공연 안내"),
        ],
        sources=["전자신문", "ZDNet", "전자신문", "연합뉴스", "연합뉴스"],
    )
