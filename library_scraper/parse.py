from __future__ import annotations
import logging
import re
from urllib.parse import urlsplit
from bs4 import BeautifulSoup, Tag
from typing import List, Optional, Tuple
from .config import DEFAULT_BASE, LIBRARY_PATH
from .markdown import ReadmeConverter, convert_readme
from .types import DetailsRecord, ListingRecord, TagRecord, VariantSummary
from .normalize import (
    find_capabilities,
    find_context_window,
    find_digest,
    find_downloads,
    find_input_type,
    find_modified_at,
    find_parameter_sizes,
    find_pulls,
    find_size,
    find_tag_count,
    find_trailing_segment,
    find_updated_phrase,
    has_size_unit,
    normalize_whitespace,
)

logger = logging.getLogger(__name__)

LIBRARY_PREFIX = LIBRARY_PATH + "/"

# Metadata text longer than this belongs to more than one tag row.
MAX_ANCESTOR_TEXT = 200
MAX_FOLLOWING_TEXT = 100
MAX_ANCESTOR_DEPTH = 3
MAX_FOLLOWING_ELEMENTS = 3

_VARIANT_PATH_RE = re.compile(rf"{re.escape(LIBRARY_PREFIX)}[^/:]+:([^/]+)$")

def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")

def _href_path(a: Tag) -> str:
    return urlsplit(a.get("href") or "").path

def _catalog_slug(href: str) -> Optional[str]:
    if not href.startswith(LIBRARY_PREFIX):
        return None
    rest = href[len(LIBRARY_PREFIX):].strip()
    if not rest or "/" in rest or ":" in rest:
        return None
    return rest

def _first_catalog_link(li: Tag) -> Optional[Tuple[Tag, str]]:
    links = ((a, _catalog_slug(a.get("href") or "")) for a in li.select(f'a[href^="{LIBRARY_PREFIX}"]'))
    return next(((a, slug) for a, slug in links if slug), None)

def _listing_description(li: Tag, slug: str, full_text: str) -> str:
    p = li.find("p")
    if p is not None:
        return p.get_text().strip()
    m = re.search(rf"{re.escape(slug)}\s+(.+?)(?:\n|$)", full_text, re.DOTALL)
    return m.group(1).strip() if m else ""

def parse_listing(html: str, base_url: str = DEFAULT_BASE) -> List[ListingRecord]:
    soup = _soup(html)
    models: List[ListingRecord] = []
    seen = set()

    for li in soup.find_all("li"):
        match = _first_catalog_link(li)
        if match is None:
            continue
        a, slug = match
        if slug in seen:
            continue
        seen.add(slug)

        full_text = li.get_text()
        capabilities = find_capabilities(full_text)
        models.append(ListingRecord(
            name=slug,
            description=_listing_description(li, slug, full_text),
            parameters=tuple(find_parameter_sizes(full_text)),
            pulls=find_pulls(full_text),
            tags=find_tag_count(full_text),
            last_updated=find_updated_phrase(full_text),
            url=f"{base_url.rstrip('/')}{a['href'].strip()}",
            capabilities=tuple(capabilities) if capabilities else None,
        ))

    logger.debug("parsed %d listing records", len(models))
    return models

def _details_last_updated(soup: BeautifulSoup) -> str:
    stamp = next((t.get_text().strip() for t in soup.find_all("time") if t.get_text().strip()), "")
    if stamp:
        return stamp
    scope = soup.find("main") or soup
    return find_updated_phrase(scope.get_text())

def _variant_row_text(a: Tag) -> str:
    row = a.find_parent(["li", "div", "tr"])
    if row is None:
        row = a.parent
    return normalize_whitespace(row.get_text(" ")) if row is not None else ""

def _parse_variants(soup: BeautifulSoup) -> List[VariantSummary]:
    variants: List[VariantSummary] = []
    seen_tags = set()

    for a in soup.select(f'a[href*="{LIBRARY_PREFIX}"][href*=":"]'):
        m = _VARIANT_PATH_RE.search(_href_path(a))
        if not m:
            continue
        tag = m.group(1)
        if tag in seen_tags:
            continue
        seen_tags.add(tag)

        text = _variant_row_text(a)
        variants.append(VariantSummary(
            name=tag,
            size=find_size(text),
            context_window=find_context_window(text),
            input_type=find_input_type(text),
            last_updated=find_trailing_segment(text),
        ))
    return variants

def parse_details(
    html: str,
    slug: str,
    base_url: str = DEFAULT_BASE,
    converter: Optional[ReadmeConverter] = None,
) -> DetailsRecord:
    soup = _soup(html)

    summary = soup.select_one("#summary-content")
    description = summary.get_text().strip() if summary is not None else ""

    downloads = next(
        (d for d in (find_downloads(el.get_text()) for el in soup.find_all(["span", "div"])) if d),
        "0",
    )

    readme_html: Optional[str] = None
    readme_markdown: Optional[str] = None
    display = soup.select_one("#display")
    if display is not None:
        readme_html = display.decode_contents().strip() or None
    if readme_html:
        result = convert_readme(readme_html, converter or ReadmeConverter(base_url=base_url))
        if result.ok:
            readme_markdown = result.markdown
        else:
            logger.warning("Failed to convert readme to markdown for %s: %s", slug, result.error)

    return DetailsRecord(
        name=slug,
        description=description,
        downloads=downloads,
        last_updated=_details_last_updated(soup),
        readme_html=readme_html,
        readme_markdown=readme_markdown,
        models=tuple(_parse_variants(soup)),
    )

def _next_sibling_text(a: Tag) -> Optional[str]:
    sib = a.find_next_sibling()
    if sib is None:
        return None
    text = sib.get_text()
    return text if has_size_unit(text) else None

def _ancestor_text(a: Tag) -> Optional[str]:
    container = a.parent
    depth = MAX_ANCESTOR_DEPTH
    while container is not None and depth > 0:
        text = container.get_text()
        if has_size_unit(text) and len(text) < MAX_ANCESTOR_TEXT:
            return text
        container = container.parent
        depth -= 1
    return None

def _following_text(a: Tag) -> Optional[str]:
    return next(
        (t for t in (el.get_text() for el in a.find_next_siblings(limit=MAX_FOLLOWING_ELEMENTS))
         if has_size_unit(t) and len(t) < MAX_FOLLOWING_TEXT),
        None,
    )

def tag_metadata_text(a: Tag) -> str:
    '''
    Text carrying one tag link's size/digest/date, found by looking
    progressively further from the link:
    - the next sibling element, if it mentions GB/MB/TB
    - up to 3 ancestors, the first mentioning a size unit in under 200 chars
    - up to 3 following siblings, the first mentioning a size unit in under 100 chars
    Empty string when none qualify.
    '''
    for stage in (_next_sibling_text, _ancestor_text, _following_text):
        text = stage(a)
        if text:
            return text
    return ""

def parse_tags(html: str, slug: str) -> List[TagRecord]:
    soup = _soup(html)
    tag_path = re.compile(rf"{re.escape(LIBRARY_PREFIX + slug)}:([^/]+)$")
    tags: List[TagRecord] = []
    seen_tags = set()

    for a in soup.find_all("a", href=True):
        m = tag_path.fullmatch(_href_path(a))
        if not m:
            continue
        tag = m.group(1)
        if tag in seen_tags:
            continue
        seen_tags.add(tag)

        text = normalize_whitespace(tag_metadata_text(a))
        aliases = None
        if tag != "latest" and "latest" in a.get_text().lower():
            aliases = ("latest",)

        tags.append(TagRecord(
            name=tag,
            size=find_size(text),
            digest=find_digest(text),
            modified_at=find_modified_at(text),
            context_window=find_context_window(text),
            input_type=find_input_type(text),
            aliases=aliases,
        ))

    logger.debug("parsed %d tags for %s", len(tags), slug)
    return tags
