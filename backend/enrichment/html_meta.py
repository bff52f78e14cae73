import html
import logging
import re

import httpx

from enrichment.base import MetadataEnricher
from enrichment.types import LinkMetadata

logger = logging.getLogger(__name__)

TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)


def _meta_content(page: str, attr: str, name: str) -> str | None:
    # Accept either attribute order: name/property before or after content
    patterns = [
        rf"<meta\s+[^>]*{attr}=[\"']{re.escape(name)}[\"'][^>]*content=[\"']([^\"']+)[\"']",
        rf"<meta\s+[^>]*content=[\"']([^\"']+)[\"'][^>]*{attr}=[\"']{re.escape(name)}[\"']",
    ]
    for pattern in patterns:
        match = re.search(pattern, page, re.IGNORECASE)
        if match:
            return html.unescape(match.group(1).strip())
    return None


def parse_metadata(page: str) -> LinkMetadata:
    title = _meta_content(page, "property", "og:title")
    if not title:
        match = TITLE_RE.search(page)
        title = html.unescape(match.group(1).strip()) if match else None
    description = _meta_content(page, "property", "og:description") or _meta_content(
        page, "name", "description"
    )
    return LinkMetadata(
        title=title or None,
        description=description or None,
        favicon=_meta_content(page, "property", "og:image"),
    )


class HtmlMetaEnricher(MetadataEnricher):
    """Fetch the page and read its <title> and meta tags."""

    def __init__(
        self,
        timeout: float = 8.0,
        user_agent: str = "Mozilla/5.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    async def enrich(self, url: str) -> LinkMetadata:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                resp = await client.get(url, headers={"User-Agent": self.user_agent})
                resp.raise_for_status()
                return parse_metadata(resp.text)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Metadata fetch failed for {url}: {e}")
            return LinkMetadata()
