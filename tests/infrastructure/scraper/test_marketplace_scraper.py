# 🧪 tests/infrastructure/scraper/test_marketplace_scraper.py
"""
🧪 MarketplaceScraper на фейковій браузерній сесії.
"""

from __future__ import annotations

import asyncio
import random

import pytest

from catalog_ingest.config import ScraperConfig
from catalog_ingest.errors import InputError, TransientFetchError
from catalog_ingest.infrastructure.scraper import MarketplaceScraper
from catalog_ingest.infrastructure.web import generate_fingerprint

PRODUCT_HTML = """
<html><body>
  <h1 data-pl="product-title">Cotton Romper</h1>
  <div class="product-price-current">US $8.40</div>
</body></html>
"""


# ───────────────────────────────────────────────────────────────────────────
# ФЕЙКИ
# ───────────────────────────────────────────────────────────────────────────

class FakePage:
    def __init__(self, html: str) -> None:
        self.html = html

    async def content(self) -> str:
        return self.html

    async def title(self) -> str:
        return "Cotton Romper | AliExpress"


class FakeSession:
    def __init__(self, *, failures: int = 0, html: str = PRODUCT_HTML) -> None:
        self.failures = failures
        self.html = html
        self.startups = 0
        self.shutdowns = 0
        self.opened = 0
        self.released = 0
        self.navigations: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def startup(self) -> None:
        self.startups += 1

    async def shutdown(self) -> None:
        self.shutdowns += 1

    async def new_page(self) -> FakePage:
        self.opened += 1
        return FakePage(self.html)

    async def release_page(self, page) -> None:
        self.released += 1

    async def navigate(self, page, url: str) -> None:
        self.navigations.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if len(self.navigations) <= self.failures:
                raise TransientFetchError(url=url, details="TimeoutError")
        finally:
            self.in_flight -= 1

    async def wait_for_content(self, page) -> bool:
        return True

    async def expand_shipping(self, page) -> None:
        return None


class FakeRateLimiter:
    def __init__(self) -> None:
        self.calls = 0

    async def wait_for_next_request(self) -> None:
        self.calls += 1


def make_scraper(session: FakeSession, no_sleep, **config_overrides):
    config = ScraperConfig(
        min_request_interval_ms=0,
        humanize_delay_ms=(0, 0),
        **config_overrides,
    )
    limiter = FakeRateLimiter()
    scraper = MarketplaceScraper(
        config,
        fingerprint=generate_fingerprint(random.Random(0)),
        session=session,  # type: ignore[arg-type]
        rate_limiter=limiter,  # type: ignore[arg-type]
        sleep=no_sleep,
    )
    return scraper, limiter


# ───────────────────────────────────────────────────────────────────────────
# ТЕСТИ
# ───────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "url",
    [
        "https://www.aliexpress.com/category/100003109/women-clothing.html",
        "https://www.amazon.com/item/123.html",
        "not a url",
    ],
)
async def test_invalid_url_fails_before_any_network_step(url: str, no_sleep) -> None:
    session = FakeSession()
    scraper, limiter = make_scraper(session, no_sleep)

    with pytest.raises(InputError) as info:
        await scraper.scrape_product(url)

    assert str(info.value) == "Invalid AliExpress product URL"
    assert limiter.calls == 0
    assert session.startups == 0
    assert session.opened == 0


@pytest.mark.asyncio
async def test_successful_scrape_uses_canonical_url(no_sleep) -> None:
    session = FakeSession()
    scraper, limiter = make_scraper(session, no_sleep)

    record = await scraper.scrape_product("https://m.aliexpress.us/item/1005004.html?spm=a2g0o&gatewayAdapt=glo2usa")

    assert record.product_id == "1005004"
    assert record.source_url == "https://www.aliexpress.com/item/1005004.html"
    assert record.title == "Cotton Romper"
    assert record.price == pytest.approx(8.4)
    assert session.navigations == ["https://www.aliexpress.com/item/1005004.html"]
    assert limiter.calls == 1
    assert session.released == session.opened == 1


@pytest.mark.asyncio
async def test_transient_failures_are_retried_with_backoff(no_sleep) -> None:
    session = FakeSession(failures=2)
    scraper, limiter = make_scraper(session, no_sleep, max_retries=3, retry_base_delay_ms=1000)

    record = await scraper.scrape_product("https://www.aliexpress.com/item/42.html")

    assert record.product_id == "42"
    assert len(session.navigations) == 3
    assert limiter.calls == 3
    assert session.released == session.opened == 3
    backoff = [s for s in no_sleep.calls if s >= 1.0]
    assert backoff == [1.0, 2.0]


@pytest.mark.asyncio
async def test_exhausted_retries_raise_last_error(no_sleep) -> None:
    session = FakeSession(failures=100)
    scraper, _ = make_scraper(session, no_sleep, max_retries=2, retry_base_delay_ms=10)

    with pytest.raises(TransientFetchError) as info:
        await scraper.scrape_product("https://www.aliexpress.com/item/42.html")

    assert "Please try again later" in str(info.value)
    assert len(session.navigations) == 3
    assert session.released == session.opened == 3


@pytest.mark.asyncio
async def test_submit_runs_requests_one_at_a_time(no_sleep) -> None:
    session = FakeSession()
    scraper, _ = make_scraper(session, no_sleep)

    futures = [
        scraper.submit("https://www.aliexpress.com/item/1.html"),
        scraper.submit("https://www.aliexpress.com/item/2.html"),
        scraper.submit("https://www.aliexpress.com/item/3.html"),
    ]
    records = await asyncio.gather(*futures)

    assert [r.product_id for r in records] == ["1", "2", "3"]
    assert session.max_in_flight == 1


@pytest.mark.asyncio
async def test_submit_delivers_input_error_to_its_future(no_sleep) -> None:
    session = FakeSession()
    scraper, _ = make_scraper(session, no_sleep)

    bad = scraper.submit("https://www.aliexpress.com/store/123")
    good = scraper.submit("https://www.aliexpress.com/item/9.html")

    with pytest.raises(InputError):
        await bad
    assert (await good).product_id == "9"


@pytest.mark.asyncio
async def test_close_is_idempotent(no_sleep) -> None:
    session = FakeSession()
    async with make_scraper(session, no_sleep)[0] as scraper:
        await scraper.scrape_product("https://www.aliexpress.com/item/5.html")
        await scraper.close()

    assert session.shutdowns == 1


@pytest.mark.asyncio
async def test_close_swallows_shutdown_errors(no_sleep) -> None:
    class BrokenSession(FakeSession):
        async def shutdown(self) -> None:
            raise RuntimeError("browser already gone")

    scraper, _ = make_scraper(BrokenSession(), no_sleep)
    await scraper.close()
    await scraper.close()
