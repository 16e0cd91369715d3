# FILE: app/capabilities/reconciler.py
"""
Capability reconciliation: current store state vs. a desired-state source.

The current models are the authoritative enumeration. The source is only
asked about ids that exist in the store, so models that appear only in the
source are never reported here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Protocol, Tuple

from app.capabilities.types import (
    CAPABILITY_FIELDS,
    CapabilityRecord,
    ModelCapabilityRecord,
    fields_equal,
)


class DesiredSource(Protocol):
    name: str

    def __len__(self) -> int: ...

    def lookup(self, model_id: str) -> CapabilityRecord: ...

    def has_entry(self, model_id: str) -> bool: ...


@dataclass(frozen=True)
class CapabilityDiff:
    model_id: str
    current: CapabilityRecord
    desired: CapabilityRecord
    changed_fields: Tuple[str, ...] = ()
    # Informational only; never affects `changed`
    in_desired_source: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.changed_fields)

    def update_record(self) -> ModelCapabilityRecord:
        return ModelCapabilityRecord.from_capabilities(self.model_id, self.desired)


@dataclass(frozen=True)
class ReconcileSummary:
    total: int = 0
    in_source: int = 0
    changed: int = 0
    unchanged: int = 0
    not_in_source: int = 0


@dataclass(frozen=True)
class ReconcileResult:
    diffs: Tuple[CapabilityDiff, ...] = ()
    summary: ReconcileSummary = field(default_factory=ReconcileSummary)

    @property
    def changed(self) -> List[CapabilityDiff]:
        return [d for d in self.diffs if d.changed]

    @property
    def unchanged(self) -> List[CapabilityDiff]:
        return [d for d in self.diffs if not d.changed]

    @property
    def not_in_source(self) -> List[str]:
        return [d.model_id for d in self.diffs if not d.in_desired_source]

    def updates(self) -> List[ModelCapabilityRecord]:
        """Desired records for the changed models, in input order."""
        return [d.update_record() for d in self.diffs if d.changed]

    def desired_state(self) -> List[ModelCapabilityRecord]:
        """Every model with its desired values applied."""
        return [d.update_record() for d in self.diffs]


def diff_capabilities(current: CapabilityRecord, desired: CapabilityRecord) -> Tuple[str, ...]:
    """Names of the fields whose values differ (absence-aware)."""
    return tuple(
        name for name in CAPABILITY_FIELDS
        if not fields_equal(current.get(name), desired.get(name))
    )


def reconcile(current_models: Iterable[ModelCapabilityRecord], source: DesiredSource) -> ReconcileResult:
    """One CapabilityDiff per current model, in input order."""
    diffs: List[CapabilityDiff] = []
    for model in current_models:
        current = model.capabilities
        desired = source.lookup(model.id)
        diffs.append(CapabilityDiff(
            model_id=model.id,
            current=current,
            desired=desired,
            changed_fields=diff_capabilities(current, desired),
            in_desired_source=source.has_entry(model.id),
        ))

    changed = sum(1 for d in diffs if d.changed)
    in_source = sum(1 for d in diffs if d.in_desired_source)
    summary = ReconcileSummary(
        total=len(diffs),
        in_source=in_source,
        changed=changed,
        unchanged=len(diffs) - changed,
        not_in_source=len(diffs) - in_source,
    )
    return ReconcileResult(diffs=tuple(diffs), summary=summary)
