import logging

from .http import FetchError, TransportError
from .markdown import ConversionResult, ReadmeConverter
from .parse import parse_details, parse_listing, parse_tags
from .scraper import LibraryScraper
from .types import DetailsRecord, ListingRecord, SortOption, TagRecord, VariantSummary

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConversionResult",
    "DetailsRecord",
    "FetchError",
    "LibraryScraper",
    "ListingRecord",
    "ReadmeConverter",
    "SortOption",
    "TagRecord",
    "TransportError",
    "VariantSummary",
    "parse_details",
    "parse_listing",
    "parse_tags",
]
