# FILE: tests/test_static_source.py
"""
Tests for app/capabilities/static_source.py and config/model_capabilities.py

Run with: pytest tests/test_static_source.py -v
"""

import math

import pytest

from app.capabilities.static_source import (
    CapabilityMapping,
    StaticCapabilitySource,
    default_static_source,
)
from app.capabilities.types import EMPTY_CAPABILITIES, CapabilityKind, CapabilityRecord
from config.model_capabilities import MAPPING_VERSION, MODEL_CAPABILITIES


@pytest.fixture
def source():
    return StaticCapabilitySource(CapabilityMapping.from_dict({
        "openai/gpt-4o": {"pricing_image_gen": 0.02, "pricing_web_search": None},
        "xai/grok-4": {"pricing_image_gen": None, "pricing_web_search": 0.05},
        "openai/gpt-5": {"pricing_image_gen": 0.02, "pricing_web_search": 0.025},
        "acme/free": {"pricing_image_gen": 0, "pricing_web_search": None},
    }, version="test"))


class TestLookup:
    """Exact-match lookup with an all-absent default."""

    def test_exact_match_returns_entry(self, source):
        assert source.lookup("openai/gpt-4o") == CapabilityRecord(
            pricing_image_gen=0.02, pricing_web_search=None,
        )

    def test_unknown_model_returns_default(self, source):
        assert source.lookup("anthropic/claude-opus-4") == EMPTY_CAPABILITIES

    def test_lookup_is_case_sensitive(self, source):
        assert source.lookup("OpenAI/GPT-4o") == EMPTY_CAPABILITIES
        assert not source.has_entry("OpenAI/GPT-4o")

    def test_has_entry(self, source):
        assert source.has_entry("xai/grok-4")
        assert not source.has_entry("xai/grok-2")

    def test_zero_price_kept_distinct_from_absent(self, source):
        caps = source.lookup("acme/free")
        assert caps.pricing_image_gen == 0
        assert caps.pricing_image_gen is not None


class TestModelsWithCapability:
    """Filtering by capability keeps mapping order."""

    def test_image_gen(self, source):
        assert source.models_with_capability("imageGen") == [
            "openai/gpt-4o", "openai/gpt-5", "acme/free",
        ]

    def test_web_search(self, source):
        assert source.models_with_capability(CapabilityKind.WEB_SEARCH) == [
            "xai/grok-4", "openai/gpt-5",
        ]

    def test_unknown_kind_rejected(self, source):
        with pytest.raises(ValueError):
            source.models_with_capability("video")


class TestCapabilityMapping:
    """Mapping construction and immutability."""

    def test_mapping_is_read_only(self):
        mapping = CapabilityMapping.from_dict({"a/b": {"pricing_image_gen": 1.0}})
        with pytest.raises(TypeError):
            mapping["a/c"] = CapabilityRecord()  # type: ignore[index]
        with pytest.raises(TypeError):
            mapping._entries["a/c"] = CapabilityRecord()  # type: ignore[index]

    def test_from_dict_copies_input(self):
        raw = {"a/b": {"pricing_image_gen": 1.0}}
        mapping = CapabilityMapping.from_dict(raw)
        raw["a/c"] = {"pricing_image_gen": 2.0}
        assert "a/c" not in mapping
        assert len(mapping) == 1

    def test_from_dict_normalises_values(self):
        mapping = CapabilityMapping.from_dict({
            "a/b": {"pricing_image_gen": "$0.04", "pricing_web_search": float("nan")},
        })
        assert mapping["a/b"] == CapabilityRecord(pricing_image_gen=0.04, pricing_web_search=None)

    def test_from_dict_drops_infinite_values(self):
        source = StaticCapabilitySource(CapabilityMapping.from_dict({
            "a/b": {"pricing_image_gen": float("inf"), "pricing_web_search": float("-inf")},
        }))
        record = source.lookup("a/b")
        for value in (record.pricing_image_gen, record.pricing_web_search):
            assert value is None or math.isfinite(value)
        assert record == CapabilityRecord()


class TestDefaultMapping:
    """The shipped mapping is well formed."""

    def test_default_source_matches_config(self):
        source = default_static_source()
        assert source.version == MAPPING_VERSION
        assert len(source) == len(MODEL_CAPABILITIES)
        assert source.name == "static-mapping"

    def test_every_entry_is_absent_or_finite(self):
        source = default_static_source()
        for model_id in MODEL_CAPABILITIES:
            caps = source.lookup(model_id)
            for value in caps.to_dict().values():
                assert value is None or math.isfinite(value), model_id

    def test_ids_have_provider_prefix(self):
        for model_id in MODEL_CAPABILITIES:
            provider, _, name = model_id.partition("/")
            assert provider and name, model_id

    def test_known_entry(self):
        caps = default_static_source().lookup("openai/gpt-4o")
        assert caps.pricing_image_gen == 0.02
        assert caps.pricing_web_search is None
