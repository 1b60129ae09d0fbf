"""Pytest-wide fixtures: sample pages for each supported source."""

from __future__ import annotations

import json

import pytest

VNEXPRESS_URL = "https://vnexpress.net/ha-noi-mua-lon-nhieu-tuyen-pho-ngap-4721234.html"
VNEXPRESS_EN_URL = "https://e.vnexpress.net/news/business/vietnam-gdp-grows-4721999.html"
NYTIMES_URL = "https://www.nytimes.com/2024/03/01/us/storm-coast.html"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep developer environment settings out of tests."""
    for key in [
        "NEWSNORM_USER_AGENT",
        "NEWSNORM_FETCH_TIMEOUT",
        "GROQ_API_KEY",
        "GROQ_BASE_URL",
        "GROQ_SUMMARY_MODEL",
        "GROQ_TRANSLATION_MODEL",
        "LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)


def jsonld(payload) -> str:
    """Render a JSON-LD script block."""
    return (
        '<script type="application/ld+json">'
        + json.dumps(payload, ensure_ascii=False)
        + "</script>"
    )


@pytest.fixture
def vnexpress_html() -> str:
    return """
    <html>
    <head>
        <title>Hà Nội mưa lớn - VnExpress</title>
        <meta property="og:title" content="Hà Nội mưa lớn (og)">
        <meta name="keywords" content="mưa, Hà Nội">
    </head>
    <body>
        <span class="date">Thứ bảy, 2/3/2024, 10:00 (GMT+7)</span>
        <h1 class="title-detail">Hà Nội mưa lớn, nhiều tuyến phố ngập</h1>
        <p class="description">Mưa lớn kéo dài khiến nhiều tuyến phố ngập sâu.</p>
        <article class="fck_detail">
            <p class="Normal">Đoạn một của bài viết.</p>
            <p class="Normal">   </p>
            <p class="Normal">Đoạn hai của bài viết.</p>
            <p class="caption">Ảnh: minh họa</p>
        </article>
        <div class="tag_item"><a href="/chu-de/mua-1">Mưa lớn</a></div>
        <div class="tag_item"><a href="/chu-de/ha-noi-2">Hà Nội</a></div>
    </body>
    </html>
    """


@pytest.fixture
def vnexpress_en_html() -> str:
    return """
    <html>
    <head><title>Vietnam GDP grows - VnExpress International</title></head>
    <body>
        <h1 class="title_news_detail">Vietnam's GDP grows 6% in first quarter</h1>
        <div class="byline">By Hoang Phong | March 2, 2024</div>
        <span class="date">March 2, 2024 | 08:00 pm GMT+7</span>
        <p class="lead">Growth beat forecasts on strong exports.</p>
        <div class="fck_detail">
            <p>Exports rose sharply in the first three months.</p>
            <p>Manufacturing led the expansion.</p>
        </div>
        <div class="tags"><a href="/tag/economy">economy</a><a href="/tag/gdp">GDP</a></div>
    </body>
    </html>
    """


@pytest.fixture
def nytimes_html() -> str:
    return """
    <html>
    <head>
        <title>Storm Hits Coast - The New York Times</title>
        <meta property="og:title" content="Storm Hits Coast (og)">
        <meta property="article:published_time" content="2024-03-02T08:00:00-05:00">
    </head>
    <body>
        <div class="nyt-a-1x2y3z">
        <h1 data-testid="headline">Storm Hits Coast</h1>
        <span data-testid="byline-author">Jane Doe</span>
        <span data-testid="byline-author">John Roe</span>
        <time datetime="2024-03-01T10:00:00-05:00">March 1, 2024</time>
        <p data-testid="summary">A powerful storm battered the coast.</p>
        <section name="articleBody">
            <p>Advertisement</p>
            <p>The storm made landfall early Friday.</p>
            <p>Already a subscriber? Log in.</p>
            <p>Residents evacuated overnight.</p>
        </section>
        <div data-testid="tags"><a href="#">Weather</a><a href="#">Storms</a></div>
        </div>
    </body>
    </html>
    """
