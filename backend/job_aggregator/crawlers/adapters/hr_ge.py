from __future__ import annotations

import re

from job_aggregator.crawlers.base import RawListing, SourceAdapter, clean_text
from job_aggregator.crawlers.http_helpers import fetch_html, soup_links
from job_aggregator.utils.dates import GEORGIAN, day_month_pattern

DATE_RE = day_month_pattern((GEORGIAN,))
CITY_RE = re.compile(
    r"(თბილისი|ბათუმი|ქუთაისი|რუსთავი|ზუგდიდი|გორი|ფოთი|ქობულეთი|სამტრედია|ხაშური|სენაკი|მარნეული|თელავი|ახალციხე|ოზურგეთი)"
)
SALARY_SELECTOR = "[class*='currency'], [class*='salary'], [class*='gel'], [class*='lari']"


class HrGeAdapter(SourceAdapter):
    source_name = "hr.ge"
    id_prefix = "hrge"
    base_url = "https://www.hr.ge"
    search_path = "/search-posting"

    def fetch(self, query: str | None = None) -> str:
        return fetch_html(self.search_url(query))

    @staticmethod
    def _title(link_el) -> str:
        heading = link_el.select_one("h3, h2, .title, [class*='title']")
        if heading:
            title = clean_text(heading.get_text(" ", strip=True))
            if title:
                return title
        lines = [line.strip() for line in link_el.get_text("\n").splitlines() if line.strip()]
        return clean_text(lines[0]) if lines else ""

    def parse(self, html: str) -> list[RawListing]:
        soup, _ = soup_links(html)
        listings: list[RawListing] = []
        seen: set[str] = set()

        for link_el in soup.select("a[href*='/announcement/']"):
            href = (link_el.get("href") or "").strip()
            match = re.search(r"/announcement/(\d+)", href)
            if not match:
                continue

            native_id = match.group(1)
            if native_id in seen:
                continue
            seen.add(native_id)

            title = self._title(link_el)
            if not self.is_usable_title(title):
                continue

            # Card is the parent of the closest enclosing div; fall back to the anchor itself.
            container = link_el.find_parent("div")
            card = link_el
            if container is not None:
                card = container.parent if container.parent is not None else container
            card_text = clean_text(card.get_text(" ", strip=True))

            company_el = card.select_one("a[href*='/customer/']")
            company = clean_text(company_el.get_text(" ", strip=True)) if company_el else None

            city = CITY_RE.search(card_text)
            date_match = DATE_RE.search(card_text)

            listings.append(
                RawListing(
                    native_id=native_id,
                    href=href,
                    title=title,
                    company=company or None,
                    location=city.group(1) if city else None,
                    date_text=date_match.group(1) if date_match else "",
                    has_salary=bool(card.select(SALARY_SELECTOR)),
                )
            )

        return listings
