from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from markdownify import ATX, MarkdownConverter
from .config import DEFAULT_BASE

@dataclass(frozen=True)
class ConversionResult:
    markdown: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

class ReadmeConverter(MarkdownConverter):
    """Readme HTML -> Markdown with site-relative image sources made absolute."""

    def __init__(self, base_url: str = DEFAULT_BASE, **options):
        options.setdefault("heading_style", ATX)
        options.setdefault("bullets", "-")
        super().__init__(**options)
        self.base_url = base_url.rstrip("/")

    def absolute_src(self, src: str) -> str:
        return f"{self.base_url}{src}" if src.startswith("/") else src

    def convert_img(self, el, text, *args, **kwargs):
        alt = el.get("alt", "") or ""
        src = self.absolute_src(el.get("src", "") or "")
        title = el.get("title", "") or ""
        if title:
            title = title.replace('"', r"\"")
            return f'![{alt}]({src} "{title}")'
        return f"![{alt}]({src})"

def convert_readme(html: str, converter: ReadmeConverter) -> ConversionResult:
    '''
    Never raises. A failed conversion comes back as ConversionResult(error=...);
    blank output comes back as ConversionResult(markdown=None).
    '''
    try:
        markdown = converter.convert(html).strip()
    except Exception as e:
        return ConversionResult(error=e)
    return ConversionResult(markdown=markdown or None)
