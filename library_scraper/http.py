from __future__ import annotations
import logging
from typing import Optional
import httpx

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "ollama-library-scraper/0.1 (one-shot catalog reader)"
}

class FetchError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

class TransportError(RuntimeError):
    """Raised by the scraper when the page for an operation could not be fetched."""

    def __init__(self, operation: str, cause: BaseException, status_code: Optional[int] = None):
        super().__init__(f"failed to fetch {operation}: {cause}")
        self.operation = operation
        self.status_code = status_code

async def fetch_text(
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout_s: float = 30.0,
    headers: dict | None = None,
) -> str:
    hdrs = dict(DEFAULT_HEADERS)
    if headers:
        hdrs.update(headers)
    logger.debug("GET %s", url)
    if client is not None:
        r = await client.get(url, headers=hdrs, follow_redirects=True)
    else:
        async with httpx.AsyncClient(timeout=timeout_s, follow_redirects=True, headers=hdrs) as c:
            r = await c.get(url)
    if not r.is_success:
        raise FetchError(f"HTTP error! status: {r.status_code}", status_code=r.status_code)
    return r.text
