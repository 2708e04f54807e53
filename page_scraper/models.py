from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


Rules = Dict[str, str]
Record = Dict[str, Optional[str]]
Row = Dict[str, str]


class ScraperOptions(BaseModel):
    """Configuration for a WebScraper instance."""
    use_browser: bool = Field(
        True,
        description="Render pages in a headless browser instead of parsing raw HTML"
    )
    throttle: int = Field(
        1000,
        ge=0,
        description="Delay in milliseconds before every request"
    )
    rules: Rules = Field(
        default_factory=dict,
        description="Field name -> CSS selector mapping"
    )
    headless: bool = True
    timeout: Optional[float] = Field(
        None,
        description="Seconds to wait for navigation or the HTTP response (None waits forever)"
    )

    @field_validator('rules')
    @classmethod
    def validate_rules(cls, v):
        for field_name, selector in v.items():
            if not field_name:
                raise ValueError("Field names must be non-empty")
            if not selector or not selector.strip():
                raise ValueError(f"Empty selector for field '{field_name}'")
        return v


class CSVOptions(BaseModel):
    """Options for CSV export."""
    preserve_nulls: bool = Field(
        False,
        description="Write missing values as the literal \"null\" instead of an empty string"
    )


class ScrapeResult(BaseModel):
    """Records collected by the CLI across several URLs."""
    urls: List[str]
    records: List[Record]

    @property
    def total_count(self) -> int:
        return len(self.records)
