from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Literal, Optional, Tuple

SortOption = Literal["newest", "most-popular", "oldest", "alphabetical"]
SORT_OPTIONS: Tuple[str, ...] = ("newest", "most-popular", "oldest", "alphabetical")

class _Record(BaseModel):
    # Immutable once built; dumps as camelCase with by_alias=True.
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

class ListingRecord(_Record):
    name: str
    description: str = ""
    parameters: Tuple[str, ...] = ()
    pulls: str = "0"
    tags: int = 0
    last_updated: str = ""
    url: str
    capabilities: Optional[Tuple[str, ...]] = None

class VariantSummary(_Record):
    name: str
    size: str = ""
    context_window: Optional[str] = None
    input_type: Optional[str] = None
    last_updated: str = ""

class DetailsRecord(_Record):
    name: str
    description: str = ""
    downloads: str = "0"
    last_updated: str = ""
    readme_html: Optional[str] = None
    readme_markdown: Optional[str] = None
    models: Tuple[VariantSummary, ...] = ()

class TagRecord(_Record):
    name: str
    size: str = ""
    digest: str = ""
    modified_at: str = ""
    context_window: Optional[str] = None
    input_type: Optional[str] = None
    aliases: Optional[Tuple[str, ...]] = None
