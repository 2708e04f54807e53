"""
Example usage of the page scraper.
"""

import asyncio
from page_scraper import ScraperOptions, WebScraper, CSVOptions, export_to_csv, export_to_json, read_csv


async def example_1_static_page():
    """Plain HTML page, no JavaScript needed."""
    print("=" * 60)
    print("Example 1: Static HTML Extraction")
    print("=" * 60)

    scraper = WebScraper(ScraperOptions(
        use_browser=False,
        throttle=500,
        rules={
            "title": "h1",
            "description": "p"
        }
    ))

    # Replace with an actual URL
    url = "https://example.com"

    try:
        record = await scraper.scrape(url, verbose=True)
        print(f"\n✓ Scraped: {record}")

        export_to_json(record, "output.json")
        export_to_csv(record, "output.csv")

    except Exception as e:
        print(f"Error: {e}")


async def example_2_browser_page():
    """JavaScript-rendered page through a headless browser."""
    print("\n" + "=" * 60)
    print("Example 2: Browser Extraction")
    print("=" * 60)

    scraper = WebScraper(
        use_browser=True,
        rules={
            "company_name": "h1",
            "tagline": ".hero p"
        }
    )

    url = "https://example.com/company"

    try:
        record = await scraper.scrape(url, verbose=True)
        export_to_csv(record, "company.csv", CSVOptions(preserve_nulls=True))

    except Exception as e:
        print(f"Error: {e}")


def example_3_read_back():
    """Read a CSV export back into rows."""
    print("\n" + "=" * 60)
    print("Example 3: Reading CSV")
    print("=" * 60)

    try:
        for row in read_csv("output.csv"):
            print(row)
    except OSError as e:
        print(f"Error: {e}")


def main():
    """Run examples."""
    print("Page Scraper - Example Usage\n")
    print("Note: Replace example URLs with actual page URLs")
    print("Run `playwright install chromium` before using browser mode\n")

    # Run examples (comment out as needed)
    asyncio.run(example_1_static_page())
    # asyncio.run(example_2_browser_page())
    example_3_read_back()


if __name__ == "__main__":
    main()
