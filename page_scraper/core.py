import asyncio
from typing import Optional, Protocol
import httpx
from .models import ScraperOptions, Rules, Record
from .parser import PageParser
from .browser import BrowserScraper


DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1"
}


class ExtractionBackend(Protocol):
    """Fetches a page and extracts one value per rule."""

    name: str

    async def extract(self, url: str, rules: Rules) -> Record:
        ...


class BrowserBackend:
    """Renders the page in a fresh headless browser for every call."""

    name = "browser"

    def __init__(self, headless: bool = True, timeout: Optional[float] = None):
        self.headless = headless
        self.timeout = timeout

    async def extract(self, url: str, rules: Rules) -> Record:
        async with BrowserScraper(headless=self.headless, timeout=self.timeout) as browser:
            return await browser.extract(url, rules)


class StaticBackend:
    """Single HTTP GET, HTML parsed without running scripts."""

    name = "static"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    async def extract(self, url: str, rules: Rules) -> Record:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=DEFAULT_HEADERS
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            html = response.text

        return PageParser(rules).parse_page(html)


def make_backend(options: ScraperOptions) -> ExtractionBackend:
    if options.use_browser:
        return BrowserBackend(headless=options.headless, timeout=options.timeout)
    return StaticBackend(timeout=options.timeout)


class WebScraper:
    """Extracts configured fields from a page, waiting a fixed delay first."""

    def __init__(self, options: Optional[ScraperOptions] = None, **kwargs):
        if options is None:
            options = ScraperOptions(**kwargs)
        elif kwargs:
            raise TypeError(f"Pass either options or keyword settings, not both (got {sorted(kwargs)})")
        self.options = options
        self.backend = make_backend(options)

    @property
    def rules(self) -> Rules:
        return self.options.rules

    async def scrape(self, url: str, verbose: bool = False) -> Record:
        """Main scraping entrypoint."""

        await self.delay(self.options.throttle)

        if verbose:
            print(f"Fetching {url} ({self.backend.name} mode)")

        data = await self.backend.extract(url, self.rules)

        if verbose:
            found = sum(1 for v in data.values() if v is not None)
            print(f"  Fields found: {found}/{len(data)}")

        return data

    async def delay(self, ms: int) -> None:
        await asyncio.sleep(ms / 1000)


async def extract(
    url: str,
    rules: Rules,
    use_browser: bool = True,
    throttle: int = 1000
) -> Record:
    """One-shot extraction without keeping a scraper around."""
    scraper = WebScraper(ScraperOptions(use_browser=use_browser, throttle=throttle, rules=rules))
    return await scraper.scrape(url)
