from __future__ import annotations
import time

from bs4 import BeautifulSoup
import httpx

from job_aggregator.core.config import settings


def browser_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": settings.accept_language,
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }


def fetch_html(url: str, timeout: float | None = None) -> str:
    # httpx timeouts are per connect/read/write; the body is read against one overall budget.
    timeout = settings.scrape_timeout_seconds if timeout is None else timeout
    deadline = time.monotonic() + timeout
    with httpx.Client(timeout=timeout, follow_redirects=True, headers=browser_headers()) as client:
        with client.stream("GET", url) as resp:
            resp.raise_for_status()
            chunks: list[bytes] = []
            for chunk in resp.iter_bytes():
                if time.monotonic() > deadline:
                    raise httpx.ReadTimeout(f"{url} exceeded {timeout}s total", request=resp.request)
                chunks.append(chunk)
            return b"".join(chunks).decode(resp.encoding or "utf-8", errors="replace")


def soup_links(html: str):
    soup = BeautifulSoup(html, "html.parser")
    return soup, soup.find_all("a")
