from typing import Optional
from selectolax.parser import HTMLParser
from .models import Rules, Record


class PageParser:
    """Extracts field text from static HTML using CSS selectors."""

    def __init__(self, rules: Rules):
        self.rules = rules

    def parse_page(self, html: str) -> Record:
        """Extract one record from a page, one value per rule."""
        tree = HTMLParser(html)
        return {
            field_name: self._extract_field(tree, selector)
            for field_name, selector in self.rules.items()
        }

    def _extract_field(self, tree: HTMLParser, selector: str) -> Optional[str]:
        """Text of the first match, trimmed; None when missing or blank."""
        target = tree.css_first(selector)

        if target is None:
            return None

        text = target.text(deep=True).strip()
        return text if text else None
