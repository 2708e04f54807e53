import asyncio
import csv
import json
from typing import Dict, List, NoReturn, Optional
import httpx
import typer
from dotenv import load_dotenv
from playwright.async_api import Error as PlaywrightError
from pydantic import ValidationError
from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from tqdm import tqdm
from .models import CSVOptions, ScrapeResult, ScraperOptions
from .core import WebScraper
from .export import export_to_csv, export_to_json, read_csv, to_json

load_dotenv()

app = typer.Typer(help="Extract fields from web pages with CSS selectors")
console = Console()


@app.command()
def scrape(
    urls: List[str] = typer.Argument(..., help="One or more URLs to scrape"),
    rule: Optional[List[str]] = typer.Option(
        None,
        "--rule",
        "-r",
        help="Extraction rule as NAME=SELECTOR (repeatable)"
    ),
    rules_file: Optional[str] = typer.Option(
        None,
        "--rules-file",
        "-f",
        help="Path to JSON file with rules (field: selector mapping)"
    ),
    rules_json: Optional[str] = typer.Option(
        None,
        "--rules-json",
        "-j",
        help="Inline JSON rules string"
    ),
    use_browser: bool = typer.Option(
        True,
        "--browser/--static",
        envvar="SCRAPER_USE_BROWSER",
        help="Render pages in a headless browser, or parse the raw HTML"
    ),
    throttle: int = typer.Option(
        1000,
        "--throttle",
        "-t",
        min=0,
        envvar="SCRAPER_THROTTLE_MS",
        help="Delay in milliseconds before each request"
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        envvar="SCRAPER_TIMEOUT",
        help="Seconds to wait for a page before giving up"
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (.csv for CSV, anything else for JSON)"
    ),
    preserve_nulls: bool = typer.Option(
        False,
        "--preserve-nulls",
        help="Write missing values as \"null\" in CSV output"
    )
):
    """Scrape one or more pages and export the extracted records."""

    rules = _load_rules(rules_file, rules_json, rule or [])

    if not rules:
        console.print("[red]Error: Must provide rules via --rule, --rules-file or --rules-json[/red]")
        console.print("\nExample rules:")
        console.print(JSON(json.dumps({
            "title": "h1",
            "price": ".product-price"
        }, indent=2)))
        raise typer.Exit(1)

    try:
        options = ScraperOptions(
            use_browser=use_browser,
            throttle=throttle,
            rules=rules,
            timeout=timeout
        )
    except ValidationError as e:
        _fail(e)

    if use_browser:
        console.print("[yellow]Browser mode enabled - JavaScript content will be rendered[/yellow]")

    try:
        result = asyncio.run(_scrape_all(WebScraper(options), urls))
    except (httpx.HTTPError, PlaywrightError) as e:
        _fail(e)

    console.print(f"\n[green]Extracted {result.total_count} records[/green]")

    if output:
        if output.lower().endswith(".csv"):
            export_to_csv(result.records, output, CSVOptions(preserve_nulls=preserve_nulls))
        else:
            export_to_json(result.records, output)
    else:
        console.print(JSON(to_json(result.records)))


@app.command("csv-to-json")
def csv_to_json(
    path: str = typer.Argument(..., help="CSV file to read"),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output JSON file path"
    )
):
    """Convert a CSV file into a JSON array of rows."""

    try:
        rows = read_csv(path)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        _fail(e)

    console.print(f"[green]Read {len(rows)} rows[/green]")

    if output:
        export_to_json(rows, output)
    else:
        console.print(JSON(to_json(rows)))


async def _scrape_all(scraper: WebScraper, urls: List[str]) -> ScrapeResult:
    records = []
    for url in tqdm(urls, desc="Scraping", unit="page", disable=len(urls) < 2):
        records.append(await scraper.scrape(url, verbose=True))
    return ScrapeResult(urls=urls, records=records)


def _load_rules(rules_file: Optional[str], rules_json: Optional[str], rule_args: List[str]) -> Dict[str, str]:
    """Merge rules from file, inline JSON and NAME=SELECTOR arguments."""
    rules: Dict[str, str] = {}
    if rules_file:
        try:
            with open(rules_file) as f:
                rules.update(_as_rules(json.load(f), rules_file))
        except (OSError, ValueError) as e:
            _fail(e)
    if rules_json:
        try:
            rules.update(_as_rules(json.loads(rules_json), "--rules-json"))
        except ValueError as e:
            _fail(e)
    for arg in rule_args:
        name, sep, selector = arg.partition("=")
        if not sep or not name.strip() or not selector.strip():
            _fail(f"Invalid rule '{arg}', expected NAME=SELECTOR")
        rules[name.strip()] = selector.strip()
    return rules


def _as_rules(data, source: str) -> Dict[str, str]:
    if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
        raise ValueError(f"{source} must be a JSON object of field: selector strings")
    return data


def _fail(error) -> NoReturn:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
