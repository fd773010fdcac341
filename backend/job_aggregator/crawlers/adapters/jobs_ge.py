from __future__ import annotations

import re
from urllib.parse import urljoin

from job_aggregator.crawlers.base import RawListing, SourceAdapter, clean_text
from job_aggregator.crawlers.http_helpers import fetch_html, soup_links
from job_aggregator.utils.dates import GEORGIAN, day_month_pattern
from job_aggregator.utils.hash import url_hash

DATE_RE = day_month_pattern((GEORGIAN,))


class JobsGeAdapter(SourceAdapter):
    source_name = "jobs.ge"
    id_prefix = "jobsge"
    base_url = "https://www.jobs.ge"
    search_path = "/ge/"

    def fetch(self, query: str | None = None) -> str:
        return fetch_html(self.search_url(query))

    def parse(self, html: str) -> list[RawListing]:
        soup, _ = soup_links(html)
        listings: list[RawListing] = []
        seen: set[str] = set()

        # Listings are table rows: title link, company link, dates in sibling cells.
        for row in soup.select("table tr"):
            cells = row.find_all("td")
            if len(cells) < 3:
                continue

            link_el = row.select_one("a[href*='view=jobs']")
            if not link_el:
                continue

            href = (link_el.get("href") or "").strip()
            title = clean_text(link_el.get_text(" ", strip=True))
            if not href or not self.is_usable_title(title):
                continue

            match = re.search(r"id=(\d+)", href)
            native_id = match.group(1) if match else url_hash(urljoin(self.base_url, href))
            if native_id in seen:
                continue
            seen.add(native_id)

            company_el = row.select_one("a[href*='view=client']")
            company = clean_text(company_el.get_text(" ", strip=True)) if company_el else None

            location = None
            location_el = row.find(["i", "em"])
            if location_el:
                location = re.sub(r"^-\s*", "", clean_text(location_el.get_text(" ", strip=True))).strip() or None

            date_text = ""
            for cell in cells:
                date_match = DATE_RE.search(clean_text(cell.get_text(" ", strip=True)))
                if date_match:
                    date_text = date_match.group(1)
                    break

            listings.append(
                RawListing(
                    native_id=native_id,
                    href=href,
                    title=title,
                    company=company,
                    location=location,
                    date_text=date_text,
                    has_salary=bool(row.select("img[alt*='ხელფასი'], img[src*='salary']")),
                    flagged_new=bool(row.select("img[alt*='ახალი'], img[src*='new'], .new")),
                )
            )

        return listings
