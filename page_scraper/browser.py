"""
Browser-based extraction for JavaScript-heavy sites using Playwright.
"""

from typing import Optional
from playwright.async_api import async_playwright, Browser, Page
from .models import Rules, Record


# Runs inside the page; returns the rendered text of the first match or null.
INNER_TEXT_JS = """(sel) => {
    const el = document.querySelector(sel);
    return el ? el.innerText : null;
}"""


class BrowserScraper:
    """Handles a single headless browser session."""

    def __init__(self, headless: bool = True, timeout: Optional[float] = None):
        self.headless = headless
        self.timeout = timeout
        self.browser: Optional[Browser] = None
        self.playwright = None

    async def __aenter__(self):
        """Context manager entry."""
        self.playwright = await async_playwright().start()
        try:
            self.browser = await self.playwright.chromium.launch(headless=self.headless)
        except BaseException:
            # __aexit__ won't run, so stop the driver here
            await self.playwright.stop()
            self.playwright = None
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        if self.browser:
            await self.browser.close()
        if self.playwright:
            await self.playwright.stop()

    async def extract(self, url: str, rules: Rules) -> Record:
        """
        Navigate to a URL and read the rendered text for each selector.

        Args:
            url: URL to open
            rules: Field name -> CSS selector mapping

        Returns:
            Record with one entry per rule, None where nothing matched
        """
        if not self.browser:
            raise RuntimeError("Browser not initialized. Use async with context manager.")

        page = await self.browser.new_page()

        try:
            await page.goto(url, wait_until="networkidle", timeout=self._timeout_ms())
            return await self._evaluate_rules(page, rules)
        finally:
            await page.close()

    async def _evaluate_rules(self, page: Page, rules: Rules) -> Record:
        data: Record = {}
        for field_name, selector in rules.items():
            data[field_name] = await page.evaluate(INNER_TEXT_JS, selector)
        return data

    def _timeout_ms(self) -> float:
        # Playwright treats 0 as "no timeout"
        if self.timeout is None:
            return 0
        return self.timeout * 1000
