from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
import logging
from urllib.parse import quote, urljoin

import httpx

from job_aggregator.core.config import settings
from job_aggregator.utils.dates import normalize_date, utc_now
from job_aggregator.utils.hash import job_id

logger = logging.getLogger(__name__)

SALARY_SPECIFIED = "მითითებულია"


@dataclass
class Job:
    id: str
    title: str
    source: str
    url: str
    posted_at: datetime
    company: str | None = None
    location: str | None = None
    salary: str | None = None
    description: str | None = None
    is_new: bool = False
    is_archived: bool = False


@dataclass
class RawListing:
    """A listing as found in the markup, before canonical mapping."""

    native_id: str | None
    href: str
    title: str
    company: str | None = None
    location: str | None = None
    date_text: str = ""
    has_salary: bool = False
    flagged_new: bool = False


@dataclass
class ScrapeResult:
    jobs: list[Job] = field(default_factory=list)
    error: str | None = None


def clean_text(value: str | None) -> str:
    return " ".join((value or "").split())


class SourceAdapter:
    source_name: str
    id_prefix: str
    base_url: str
    search_path: str = "/"

    def search_url(self, query: str | None = None) -> str:
        url = urljoin(self.base_url, self.search_path)
        text = (query or "").strip()
        if text:
            url = f"{url}?q={quote(text)}"
        return url

    def fetch(self, query: str | None = None) -> str:
        raise NotImplementedError

    def parse(self, html: str) -> list[RawListing]:
        raise NotImplementedError

    def to_canonical(self, listing: RawListing, now: datetime | None = None) -> Job:
        url = listing.href if listing.href.startswith("http") else urljoin(self.base_url, listing.href)
        return Job(
            id=job_id(self.id_prefix, url, listing.native_id),
            title=listing.title,
            source=self.source_name,
            url=url,
            posted_at=normalize_date(listing.date_text, now),
            company=listing.company or None,
            location=listing.location or settings.default_location,
            salary=SALARY_SPECIFIED if listing.has_salary else None,
            is_new=listing.flagged_new,
        )

    def is_usable_title(self, title: str) -> bool:
        return len(title) >= settings.min_title_length

    def scrape(self, query: str | None = None) -> ScrapeResult:
        """Fetch, parse and map one site; transport failures become ``error``."""
        try:
            html = self.fetch(query)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("%s responded with status %s", self.source_name, status)
            return ScrapeResult(jobs=[], error=f"{self.source_name} returned {status}")
        except httpx.HTTPError as exc:
            logger.warning("%s fetch failed: %s", self.source_name, exc)
            return ScrapeResult(jobs=[], error=f"{self.source_name} scraping failed: {exc}"[:2000])

        logger.debug("%s HTML length: %d", self.source_name, len(html))
        now = utc_now()
        listings = self.parse(html)
        jobs = [self.to_canonical(listing, now) for listing in listings]
        logger.info("%s parsed %d jobs", self.source_name, len(jobs))
        return ScrapeResult(jobs=jobs)
