from __future__ import annotations
import re
from typing import List, Optional

CAPABILITIES = ("tools", "vision", "thinking", "embedding")
SIZE_UNITS = ("GB", "MB", "TB")

_PARAM_RE = re.compile(r"\b\d+\.?\d*[bmk]\b", re.IGNORECASE)
_PULLS_RE = re.compile(r"(\d+\.?\d*[KMB]?)\s*Pulls", re.IGNORECASE)
_TAG_COUNT_RE = re.compile(r"(\d+)\s*Tags", re.IGNORECASE)
_UPDATED_RE = re.compile(r"Updated\s+([^\n]+)", re.IGNORECASE)
_DOWNLOADS_RE = re.compile(r"(\d+\.?\d*[KMB]?)\s*Downloads?", re.IGNORECASE)
_DIGEST_RE = re.compile(r"\b([a-f0-9]{12})\b")
_SIZE_RE = re.compile(r"(\d+\.?\d*\s*[GMT]B)", re.IGNORECASE)
_CONTEXT_RE = re.compile(r"(\d+K)\s*context\s*window", re.IGNORECASE)
_TRAILING_RE = re.compile(r"[•·]\s*([^•·]+?)\s*$")

# Tried in order; first hit wins.
_MODIFIED_PATTERNS = (
    re.compile(r"(\d+\s*(?:hour|day|week|month|year)s?\s*ago)", re.IGNORECASE),
    _TRAILING_RE,
    re.compile(r"(\d{1,2}\s*\w+\s*ago)", re.IGNORECASE),
)

def normalize_whitespace(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()

def has_size_unit(text: str) -> bool:
    return any(unit in text for unit in SIZE_UNITS)

def find_parameter_sizes(text: str) -> List[str]:
    '''
    Parameter size tokens ("7b", "0.5b", "1.5k"), lowercased, first-seen order.

    A token that appears right before a "Pulls" or "Tags" label anywhere in the
    text is a count, not a size, and is dropped:
    - "7b 13b 100K Pulls" -> ["7b", "13b"]
    - "999.9M Pulls" -> []
    '''
    params: List[str] = []
    for m in _PARAM_RE.finditer(text):
        token = m.group(0)
        normalized = token.lower()
        if normalized in params:
            continue
        if re.search(rf"\b{re.escape(token)}\s*(?:Pulls|Tags)", text, re.IGNORECASE):
            continue
        params.append(normalized)
    return params

def find_pulls(text: str) -> str:
    m = _PULLS_RE.search(text)
    return m.group(1) if m else "0"

def find_tag_count(text: str) -> int:
    m = _TAG_COUNT_RE.search(text)
    return int(m.group(1)) if m else 0

def find_updated_phrase(text: str) -> str:
    """Phrase after "Updated" up to the end of its line, or ""."""
    m = _UPDATED_RE.search(text)
    return m.group(1).strip() if m else ""

def find_capabilities(text: str) -> List[str]:
    # Whole-word only: "revision" is not "vision", "computer vision" is.
    return [cap for cap in CAPABILITIES if re.search(rf"\b{cap}\b", text, re.IGNORECASE)]

def find_downloads(text: str) -> Optional[str]:
    m = _DOWNLOADS_RE.fullmatch(text.strip())
    return m.group(1) if m else None

def find_digest(text: str) -> str:
    """First standalone 12-char lowercase hex token, or "". Never a slice of a longer token."""
    m = _DIGEST_RE.search(text)
    return m.group(1) if m else ""

def find_size(text: str) -> str:
    m = _SIZE_RE.search(text)
    return re.sub(r"\s+", "", m.group(1)) if m else ""

def find_context_window(text: str) -> Optional[str]:
    m = _CONTEXT_RE.search(text)
    return m.group(1) if m else None

def find_input_type(text: str) -> Optional[str]:
    if re.search(r"\bvision\b", text, re.IGNORECASE):
        return "Vision"
    if re.search(r"\btext\b", text, re.IGNORECASE):
        return "Text"
    return None

def find_trailing_segment(text: str) -> str:
    """Last segment after a "·" or "•" separator, or ""."""
    m = _TRAILING_RE.search(text)
    return m.group(1).strip() if m else ""

def find_modified_at(text: str) -> str:
    return next(
        (m.group(1).strip() for m in (p.search(text) for p in _MODIFIED_PATTERNS) if m),
        "",
    )
