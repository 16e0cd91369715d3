# FILE: app/capabilities/sync.py
"""
Capability Sync Orchestrator

Flow per run (single request, strictly sequential):
    1. Read current models from the store (read-only).
    2. Reconcile against the desired source (static mapping unless injected).
    3. preview -> report the would-be changes, no writes.
       apply   -> one bulk write with exactly the changed records (skipped
                  when nothing changed), report what the store confirmed.

Per-record write failures are part of a normal report. Anything the store
raises propagates to the caller as a request-level failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Protocol, Sequence

from app.capabilities.config import SYNC_REPORT_ID_LIMIT
from app.capabilities.reconciler import DesiredSource, ReconcileResult, reconcile
from app.capabilities.schemas import (
    CapabilityDiffOut,
    CapabilityUpdate,
    CapabilityValues,
    SyncReport,
)
from app.capabilities.static_source import default_static_source
from app.capabilities.types import ModelCapabilityRecord

logger = logging.getLogger(__name__)


class SyncMode(str, Enum):
    PREVIEW = "preview"
    APPLY = "apply"


@dataclass
class BulkUpdateResult:
    total: int = 0
    successful: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)
    updated_ids: List[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "BulkUpdateResult":
        return cls()


class ModelStore(Protocol):
    def get_current_models(self) -> List[ModelCapabilityRecord]: ...

    def bulk_upsert_capabilities(self, records: Sequence[ModelCapabilityRecord]) -> BulkUpdateResult: ...


def _to_update(record: ModelCapabilityRecord) -> CapabilityUpdate:
    return CapabilityUpdate(
        id=record.id,
        pricing_image_gen=record.pricing_image_gen,
        pricing_web_search=record.pricing_web_search,
    )


def _to_diff_out(diff) -> CapabilityDiffOut:
    return CapabilityDiffOut(
        id=diff.model_id,
        current=CapabilityValues(**diff.current.to_dict()),
        desired=CapabilityValues(**diff.desired.to_dict()),
        changed_fields=list(diff.changed_fields),
        will_update=diff.changed,
        in_source=diff.in_desired_source,
    )


class CapabilitySyncOrchestrator:
    """Drives fetch -> reconcile -> (preview | apply) for one request."""

    def __init__(
        self,
        store: ModelStore,
        source: Optional[DesiredSource] = None,
        id_limit: int = SYNC_REPORT_ID_LIMIT,
    ):
        self.store = store
        self.source = source if source is not None else default_static_source()
        self.id_limit = id_limit

    def preview(self) -> SyncReport:
        return self.run(SyncMode.PREVIEW)

    def apply(self) -> SyncReport:
        return self.run(SyncMode.APPLY)

    def run(self, mode: SyncMode) -> SyncReport:
        mode = SyncMode(mode)
        source_name = getattr(self.source, "name", "unknown")
        logger.info("[capabilities.sync] Starting %s from %s...", mode.value, source_name)

        current_models = self.store.get_current_models()
        result = reconcile(current_models, self.source)

        if mode is SyncMode.PREVIEW:
            report = self._preview_report(result)
        else:
            report = self._apply_report(result)

        logger.info(
            "[capabilities.sync] %s completed: total=%d updated=%d unchanged=%d not_in_source=%d failed=%d",
            mode.value, report.total_models, report.updated_count, report.unchanged_count,
            report.not_in_source_count, report.failed_count,
        )
        return report

    # ------------------------------------------------------------------

    def _preview_report(self, result: ReconcileResult) -> SyncReport:
        updates = result.updates()
        return self._build_report(
            SyncMode.PREVIEW,
            result,
            updated_models=[_to_update(r) for r in updates],
            failed=0,
            errors=[],
            diffs=[_to_diff_out(d) for d in result.diffs],
        )

    def _apply_report(self, result: ReconcileResult) -> SyncReport:
        updates = result.updates()

        if updates:
            logger.info("[capabilities.sync] Updating %d models with new capabilities...", len(updates))
            write = self.store.bulk_upsert_capabilities(updates)
        else:
            write = BulkUpdateResult.empty()

        confirmed = set(write.updated_ids)
        updated_models = [_to_update(r) for r in updates if r.id in confirmed]

        if write.failed:
            logger.warning(
                "[capabilities.sync] %d of %d capability updates failed", write.failed, write.total,
            )

        return self._build_report(
            SyncMode.APPLY,
            result,
            updated_models=updated_models,
            failed=write.failed,
            errors=list(write.errors),
            updated_count=write.successful,
        )

    def _build_report(
        self,
        mode: SyncMode,
        result: ReconcileResult,
        updated_models: List[CapabilityUpdate],
        failed: int,
        errors: List[str],
        diffs: Optional[List[CapabilityDiffOut]] = None,
        updated_count: Optional[int] = None,
    ) -> SyncReport:
        summary = result.summary
        return SyncReport(
            mode=mode.value,
            source=getattr(self.source, "name", "unknown"),
            mapping_version=getattr(self.source, "version", None),
            total_models=summary.total,
            in_source=summary.in_source,
            source_size=len(self.source),
            updated_count=len(updated_models) if updated_count is None else updated_count,
            unchanged_count=summary.unchanged,
            not_in_source_count=summary.not_in_source,
            failed_count=failed,
            updated_models=updated_models,
            not_in_source=result.not_in_source[: self.id_limit],
            errors=errors,
            diffs=diffs,
            timestamp=datetime.now(timezone.utc),
        )
