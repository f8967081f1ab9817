from __future__ import annotations
import logging
from urllib.parse import urlencode
from typing import List, Optional
import httpx
from .config import LIBRARY_PATH, get_base_url, get_timeout
from .http import FetchError, TransportError, fetch_text
from .markdown import ReadmeConverter
from .parse import parse_details, parse_listing, parse_tags
from .types import SORT_OPTIONS, DetailsRecord, ListingRecord, SortOption, TagRecord

logger = logging.getLogger(__name__)

class LibraryScraper:
    """Reads the ollama.com model library: catalog listing, model details, and tags.

    Holds only configuration. Every call fetches its page once and parses it;
    nothing is cached or shared between calls, so calls may run concurrently.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        converter: Optional[ReadmeConverter] = None,
        timeout_s: Optional[float] = None,
    ):
        self.base_url = get_base_url(base_url)
        self.http_client = client
        self.timeout_s = get_timeout(timeout_s)
        self.converter = converter or ReadmeConverter(base_url=self.base_url)

    @property
    def library_url(self) -> str:
        return f"{self.base_url}{LIBRARY_PATH}"

    def listing_url(self, query: Optional[str] = None, sort: Optional[SortOption] = None) -> str:
        if sort and sort not in SORT_OPTIONS:
            raise ValueError(f"sort must be one of {', '.join(SORT_OPTIONS)}, got {sort!r}")
        params = []
        if query:
            params.append(("q", query))
        if sort:
            params.append(("sort", sort))
        return f"{self.library_url}?{urlencode(params)}" if params else self.library_url

    def details_url(self, slug: str, tag: Optional[str] = None) -> str:
        return f"{self.library_url}/{slug}:{tag}" if tag else f"{self.library_url}/{slug}"

    def tags_url(self, slug: str) -> str:
        return f"{self.library_url}/{slug}/tags"

    async def _fetch(self, url: str, operation: str) -> str:
        try:
            return await fetch_text(url, client=self.http_client, timeout_s=self.timeout_s)
        except FetchError as e:
            raise TransportError(operation, e, status_code=e.status_code) from e
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            raise TransportError(operation, e) from e

    async def list_catalog(
        self,
        query: Optional[str] = None,
        sort: Optional[SortOption] = None,
    ) -> List[ListingRecord]:
        html = await self._fetch(self.listing_url(query, sort), "model listing")
        models = parse_listing(html, self.base_url)
        logger.info("listing: %d models (query=%r, sort=%r)", len(models), query, sort)
        return models

    async def get_details(self, slug: str, tag: Optional[str] = None) -> DetailsRecord:
        html = await self._fetch(self.details_url(slug, tag), "model details")
        details = parse_details(html, slug, self.base_url, self.converter)
        logger.info("details: %s, %d variants, readme=%s", slug, len(details.models), details.readme_html is not None)
        return details

    async def list_tags(self, slug: str) -> List[TagRecord]:
        html = await self._fetch(self.tags_url(slug), "model tags")
        tags = parse_tags(html, slug)
        logger.info("tags: %s, %d tags", slug, len(tags))
        return tags
