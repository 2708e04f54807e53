"""
Configurable web-page field extractor with JSON/CSV export helpers.
"""

from .models import CSVOptions, Record, Row, Rules, ScrapeResult, ScraperOptions
from .core import BrowserBackend, ExtractionBackend, StaticBackend, WebScraper, extract
from .parser import PageParser
from .browser import BrowserScraper
from .export import export_to_csv, export_to_json, iter_csv, read_csv, to_csv, to_json

__version__ = "1.0.0"

__all__ = [
    "CSVOptions",
    "Record",
    "Row",
    "Rules",
    "ScrapeResult",
    "ScraperOptions",
    "BrowserBackend",
    "ExtractionBackend",
    "StaticBackend",
    "WebScraper",
    "extract",
    "PageParser",
    "BrowserScraper",
    "export_to_csv",
    "export_to_json",
    "iter_csv",
    "read_csv",
    "to_csv",
    "to_json",
]
