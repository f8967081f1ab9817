import pytest
from pydantic import ValidationError

from library_scraper.types import DetailsRecord, ListingRecord, TagRecord, VariantSummary


def test_records_are_frozen():
    record = ListingRecord(name="qwen3", url="https://ollama.com/library/qwen3")
    with pytest.raises(ValidationError):
        record.name = "other"


def test_defaults():
    record = ListingRecord(name="qwen3", url="https://ollama.com/library/qwen3")
    assert record.description == ""
    assert record.parameters == ()
    assert record.pulls == "0"
    assert record.tags == 0
    assert record.capabilities is None


def test_camel_case_aliases():
    tag = TagRecord(name="latest", size="4.1GB", digest="abc123def456", modified_at="2 hours ago", context_window="8K")
    data = tag.model_dump(by_alias=True)
    assert data["modifiedAt"] == "2 hours ago"
    assert data["contextWindow"] == "8K"
    assert TagRecord.model_validate(data) == tag


def test_details_carry_variant_summaries():
    variant = VariantSummary(name="8b", size="5.2GB", context_window="40K", input_type="Text")
    details = DetailsRecord(name="qwen3", models=(variant,))
    data = details.model_dump(by_alias=True)
    assert data["models"][0]["contextWindow"] == "40K"
    assert data["readmeMarkdown"] is None
