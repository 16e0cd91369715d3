# FILE: app/capabilities/router.py
"""
Capability Sync Router

Endpoints (all require x-api-key):
- GET  /api/models/sync-capabilities        - preview, no writes
- POST /api/models/sync-capabilities        - apply changed records
- GET  /api/models/capabilities?kind=...    - static mapping ids with a capability
- GET  /api/models/capabilities/scrape      - fallback scrape of the gateway page

Both sync endpoints take ?source=static (default) or ?source=scraped. The
scraped source is built from a live scrape; an empty scrape is a 502 so it
is never reconciled as "no capabilities anywhere".

Sync failures that escape the orchestrator come back as a 500 with a
descriptive detail, never as an empty report.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.auth import require_sync_key
from app.capabilities.errors import SyncSourceError
from app.capabilities.reconciler import DesiredSource
from app.capabilities.schemas import (
    CapabilityListOut,
    ScrapedModelOut,
    ScrapeResultOut,
    SyncReport,
)
from app.capabilities.scraper import ScrapedCapabilitySource, scrape_models_page
from app.capabilities.static_source import default_static_source
from app.capabilities.sync import CapabilitySyncOrchestrator, SyncMode
from app.catalog.service import SqlModelStore
from app.db import get_db

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/models",
    tags=["capabilities"],
    dependencies=[Depends(require_sync_key)],
)

SOURCE_STATIC = "static"
SOURCE_SCRAPED = "scraped"


def _desired_source(source: str) -> DesiredSource:
    if source == SOURCE_STATIC:
        return default_static_source()
    if source == SOURCE_SCRAPED:
        try:
            return ScrapedCapabilitySource.from_result(scrape_models_page())
        except SyncSourceError as e:
            logger.warning("[capabilities.sync] Scraped source unavailable: %s", e)
            raise HTTPException(status_code=502, detail=str(e))
    raise HTTPException(status_code=400, detail=f"Unknown source: {source}")


def _run_sync(db: Session, mode: SyncMode, source: str) -> SyncReport:
    desired = _desired_source(source)
    verb = "preview" if mode is SyncMode.PREVIEW else "sync"
    try:
        return CapabilitySyncOrchestrator(SqlModelStore(db), desired).run(mode)
    except Exception as e:
        logger.exception("[capabilities.sync] Failed to %s capabilities", verb)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to {verb} capabilities: {e}",
        )


@router.get("/sync-capabilities", response_model=SyncReport)
def preview_capabilities(
    source: str = Query(SOURCE_STATIC, description="static or scraped"),
    db: Session = Depends(get_db),
):
    return _run_sync(db, SyncMode.PREVIEW, source)


@router.post("/sync-capabilities", response_model=SyncReport)
def sync_capabilities(
    source: str = Query(SOURCE_STATIC, description="static or scraped"),
    db: Session = Depends(get_db),
):
    return _run_sync(db, SyncMode.APPLY, source)


@router.get("/capabilities", response_model=CapabilityListOut)
def list_models_with_capability(kind: str = Query(..., description="imageGen or webSearch")):
    source = default_static_source()
    try:
        models = source.models_with_capability(kind)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown capability kind: {kind}")
    return CapabilityListOut(kind=kind, source=source.name, models=models)


@router.get("/capabilities/scrape", response_model=ScrapeResultOut)
def scrape_capabilities():
    result = scrape_models_page()
    return ScrapeResultOut(
        models=[ScrapedModelOut(**m.to_dict()) for m in result.models],
        errors=result.errors,
        strategy=result.strategy,
        timestamp=result.timestamp,
    )
