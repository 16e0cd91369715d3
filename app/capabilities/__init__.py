"""
Model Capability Sync Module

Reconciles per-use capability pricing (image generation, web search) held in
the model catalog against a desired-state source: the hand-maintained static
mapping, or a best-effort scrape of the public gateway models page.

Usage:
    from app.capabilities import CapabilitySyncOrchestrator

    report = CapabilitySyncOrchestrator(store).preview()
    report = CapabilitySyncOrchestrator(store).apply()
"""

from .pricing import parse_pricing
from .types import (
    CAPABILITY_FIELDS,
    EMPTY_CAPABILITIES,
    CapabilityKind,
    CapabilityRecord,
    ModelCapabilityRecord,
)
from .static_source import CapabilityMapping, StaticCapabilitySource, default_static_source
from .scraper import ScrapeResult, ScrapedCapabilitySource, scrape_models_page
from .reconciler import CapabilityDiff, ReconcileResult, reconcile
from .sync import BulkUpdateResult, CapabilitySyncOrchestrator, SyncMode

__all__ = [
    'parse_pricing',
    'CAPABILITY_FIELDS',
    'EMPTY_CAPABILITIES',
    'CapabilityKind',
    'CapabilityRecord',
    'ModelCapabilityRecord',
    'CapabilityMapping',
    'StaticCapabilitySource',
    'default_static_source',
    'ScrapeResult',
    'ScrapedCapabilitySource',
    'scrape_models_page',
    'CapabilityDiff',
    'ReconcileResult',
    'reconcile',
    'BulkUpdateResult',
    'CapabilitySyncOrchestrator',
    'SyncMode',
]

__version__ = '1.0.0'
