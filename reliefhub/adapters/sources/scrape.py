"""
Generic HTML scrape fallback for ReliefHub.

Extracts one update per container element of a page, given CSS
selectors for the container and its title, content, link and date.
This is the extension point for agencies without a dedicated
integration.
"""

from datetime import datetime
from typing import List, Optional
from urllib.parse import urljoin, urlparse
import aiohttp
from bs4 import BeautifulSoup, Tag
from reliefhub.adapters.http_client import HttpAdapter
from reliefhub.common.clock import Clock, utc_now
from reliefhub.core.models import SourceInfo, Update
from reliefhub.core.normalize import parse_timestamp
from reliefhub.observability.logging_setup import get_logger
from reliefhub.settings import ScrapeSelectors, ScrapeTarget

log = get_logger("reliefhub.scrape")


def _text(element: Optional[Tag]) -> str:
    return element.get_text(" ", strip=True) if element is not None else ""


def _date_text(element: Optional[Tag]) -> str:
    if element is None:
        return ""
    # <time datetime="..."> carries a machine-readable value
    return str(element.get("datetime") or "").strip() or _text(element)


def parse_updates(html: str, page_url: str, selectors: ScrapeSelectors, *,
                  fetched_at: datetime, max_chars: int = 500) -> List[Update]:
    """
    Extracts updates from a page.

    Containers without both a title and content are skipped. Relative
    links resolve against the page origin; a missing link falls back to
    the page URL, and a missing or unparsable date to the fetch time.

    Args:
        html: page body
        page_url: URL the page was fetched from
        selectors: CSS selectors
        fetched_at: fetch time
        max_chars: content length cap

    Returns:
        updates in document order
    """
    page = urlparse(page_url)
    origin = f"{page.scheme}://{page.netloc}"
    soup = BeautifulSoup(html, "html.parser")
    stamp = int(fetched_at.timestamp() * 1000)

    updates: List[Update] = []
    for index, element in enumerate(soup.select(selectors.container)):
        title = _text(element.select_one(selectors.title))
        content = _text(element.select_one(selectors.content))
        if not title or not content:
            continue

        link = element.select_one(selectors.link)
        href = str(link.get("href") or "").strip() if link is not None else ""
        if not href:
            url = page_url
        elif href.startswith("http"):
            url = href
        else:
            url = urljoin(origin + "/", href)

        updates.append(Update(
            id=f"generic_{stamp}_{index}",
            source=page.hostname or page_url,
            title=title,
            content=content[:max_chars],
            url=url,
            published_at=parse_timestamp(_date_text(element.select_one(selectors.date)), fetched_at),
            severity="medium",
            category="official",
        ))
    return updates


class GenericScraper(HttpAdapter):
    """Fetches a page and parses it against caller-supplied selectors"""

    name = "scrape"

    def __init__(self, session: aiohttp.ClientSession, *, user_agent: str,
                 timeout_sec: float = 10.0, max_chars: int = 500, clock: Clock = utc_now):
        super().__init__(session, timeout_sec)
        self.headers = {"User-Agent": user_agent}
        self.max_chars = max_chars
        self._clock = clock

    async def scrape(self, url: str, selectors: ScrapeSelectors) -> List[Update]:
        """
        Scrapes one page.

        Returns:
            extracted updates; an empty list on any failure
        """
        try:
            html = await self._request(url, headers=self.headers, as_json=False)
            updates = parse_updates(html, url, selectors, fetched_at=self._clock(), max_chars=self.max_chars)
        except Exception as e:
            log.error(f"Error scraping {url}: {e}")
            return []
        log.info(f"Scraped {len(updates)} updates from {url}")
        return updates


class ScrapedSource:
    """Official source backed by the generic scraper"""

    def __init__(self, info: SourceInfo, scraper: GenericScraper, target: ScrapeTarget):
        self.info = info
        self.scraper = scraper
        self.target = target

    async def fetch(self) -> List[Update]:
        return await self.scraper.scrape(self.target.url, self.target.selectors)
