# FILE: tests/test_reconciler.py
"""
Tests for app/capabilities/reconciler.py

Run with: pytest tests/test_reconciler.py -v
"""

import pytest

from app.capabilities.reconciler import diff_capabilities, reconcile
from app.capabilities.static_source import CapabilityMapping, StaticCapabilitySource
from app.capabilities.types import CapabilityRecord, ModelCapabilityRecord, fields_equal


@pytest.fixture
def source():
    return StaticCapabilitySource(CapabilityMapping.from_dict({
        "openai/gpt-4o": {"pricing_image_gen": 0.02, "pricing_web_search": None},
        "xai/grok-4": {"pricing_image_gen": None, "pricing_web_search": 0.05},
        "only/in-source": {"pricing_image_gen": 1.0, "pricing_web_search": 1.0},
    }))


class TestFieldsEqual:
    """Absence-aware equality."""

    def test_absent_equals_absent(self):
        assert fields_equal(None, None)

    def test_absent_never_equals_zero(self):
        assert not fields_equal(None, 0)
        assert not fields_equal(0, None)
        assert not fields_equal(0.0, None)

    def test_numbers(self):
        assert fields_equal(0.02, 0.02)
        assert fields_equal(0, 0.0)
        assert not fields_equal(0.02, 0.025)


class TestDiffCapabilities:
    """Per-field change detection."""

    def test_absent_to_absent_unchanged(self):
        assert diff_capabilities(CapabilityRecord(), CapabilityRecord()) == ()

    def test_absent_to_number_changed(self):
        assert diff_capabilities(
            CapabilityRecord(pricing_image_gen=None),
            CapabilityRecord(pricing_image_gen=0.02),
        ) == ("pricing_image_gen",)

    def test_number_to_absent_changed(self):
        assert diff_capabilities(
            CapabilityRecord(pricing_web_search=0.05),
            CapabilityRecord(pricing_web_search=None),
        ) == ("pricing_web_search",)

    def test_same_number_unchanged(self):
        caps = CapabilityRecord(pricing_image_gen=0.02)
        assert diff_capabilities(caps, CapabilityRecord(pricing_image_gen=0.02)) == ()

    def test_both_fields_changed(self):
        assert diff_capabilities(
            CapabilityRecord(0.01, 0.01),
            CapabilityRecord(0.02, 0.02),
        ) == ("pricing_image_gen", "pricing_web_search")


class TestReconcile:
    """Reconciling current models against a source."""

    def test_one_diff_per_model_in_input_order(self, source):
        current = [
            ModelCapabilityRecord("xai/grok-4"),
            ModelCapabilityRecord("anthropic/claude-opus-4"),
            ModelCapabilityRecord("openai/gpt-4o"),
        ]
        result = reconcile(current, source)
        assert [d.model_id for d in result.diffs] == [
            "xai/grok-4", "anthropic/claude-opus-4", "openai/gpt-4o",
        ]

    def test_source_only_models_are_invisible(self, source):
        result = reconcile([ModelCapabilityRecord("openai/gpt-4o")], source)
        assert [d.model_id for d in result.diffs] == ["openai/gpt-4o"]
        assert result.summary.total == 1

    def test_changed_and_in_source_flags(self, source):
        current = [
            ModelCapabilityRecord("openai/gpt-4o", None, None),
            ModelCapabilityRecord("xai/grok-4", None, 0.05),
            ModelCapabilityRecord("anthropic/claude-opus-4", None, None),
            ModelCapabilityRecord("meta/llama-4", 0.01, None),
        ]
        diffs = {d.model_id: d for d in reconcile(current, source).diffs}

        assert diffs["openai/gpt-4o"].changed
        assert diffs["openai/gpt-4o"].in_desired_source
        assert not diffs["xai/grok-4"].changed
        assert diffs["xai/grok-4"].in_desired_source
        # Not in source, already all-absent
        assert not diffs["anthropic/claude-opus-4"].changed
        assert not diffs["anthropic/claude-opus-4"].in_desired_source
        # Not in source, stale value gets cleared
        assert diffs["meta/llama-4"].changed
        assert diffs["meta/llama-4"].desired == CapabilityRecord()

    def test_summary_counts(self, source):
        current = [
            ModelCapabilityRecord("openai/gpt-4o", None, None),
            ModelCapabilityRecord("xai/grok-4", None, 0.05),
            ModelCapabilityRecord("anthropic/claude-opus-4", None, None),
        ]
        result = reconcile(current, source)
        assert result.summary.total == 3
        assert result.summary.in_source == 2
        assert result.summary.changed == 1
        assert result.summary.unchanged == 2
        assert result.summary.not_in_source == 1
        assert result.not_in_source == ["anthropic/claude-opus-4"]

    def test_updates_carry_desired_values(self, source):
        result = reconcile([ModelCapabilityRecord("openai/gpt-4o", None, None)], source)
        assert result.updates() == [ModelCapabilityRecord("openai/gpt-4o", 0.02, None)]

    def test_empty_input(self, source):
        result = reconcile([], source)
        assert result.diffs == ()
        assert result.summary.total == 0
        assert result.updates() == []

    def test_reconcile_is_idempotent(self, source):
        current = [
            ModelCapabilityRecord("openai/gpt-4o", None, 0.5),
            ModelCapabilityRecord("xai/grok-4", 0.1, None),
            ModelCapabilityRecord("meta/llama-4", 0.0, 0.0),
        ]
        first = reconcile(current, source)
        assert first.summary.changed == 3

        second = reconcile(first.desired_state(), source)
        assert second.summary.changed == 0
        assert all(not d.changed for d in second.diffs)
