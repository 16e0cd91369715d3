# FILE: app/catalog/service.py
"""
Catalog service layer.

Plain functions over a Session, plus SqlModelStore which adapts them to the
store boundary the capability sync expects.

bulk_update_model_capabilities() commits each record on its own so one bad
record fails alone. The batch as a whole is not transactional.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from app.capabilities.sync import BulkUpdateResult
from app.capabilities.types import ModelCapabilityRecord
from app.catalog import models, schemas

logger = logging.getLogger(__name__)


def get_model(db: Session, model_id: str) -> Optional[models.CatalogModel]:
    return db.query(models.CatalogModel).filter(models.CatalogModel.id == model_id).first()


def list_models(db: Session, enabled_only: bool = True) -> List[models.CatalogModel]:
    query = db.query(models.CatalogModel)
    if enabled_only:
        query = query.filter(models.CatalogModel.is_enabled.is_(True))
    return query.order_by(models.CatalogModel.id).all()


def get_enabled_models(db: Session) -> List[ModelCapabilityRecord]:
    """Current capability state of every enabled model, ordered by id."""
    return [
        ModelCapabilityRecord(
            id=row.id,
            pricing_image_gen=row.pricing_image_gen,
            pricing_web_search=row.pricing_web_search,
        )
        for row in list_models(db, enabled_only=True)
    ]


def upsert_models(db: Session, items: Iterable[schemas.ModelIn]) -> int:
    """
    Insert new catalog rows or refresh existing ones.
    Capability pricing is left alone; it belongs to the capability sync.
    """
    count = 0
    for item in items:
        row = get_model(db, item.id)
        if row is None:
            row = models.CatalogModel(id=item.id)
            db.add(row)
        row.name = item.name
        row.provider = item.provider
        row.description = item.description
        row.model_type = item.model_type
        row.context_window = item.context_window
        row.pricing_input = item.pricing_input
        row.pricing_output = item.pricing_output
        row.is_enabled = item.is_enabled
        row.updated_at = datetime.utcnow()
        count += 1
    db.commit()
    logger.info("[catalog] Upserted %d models", count)
    return count


def bulk_update_model_capabilities(
    db: Session,
    records: Sequence[ModelCapabilityRecord],
) -> BulkUpdateResult:
    """Write capability pricing per record. Failures are collected, never raised."""
    result = BulkUpdateResult(total=len(records))

    for record in records:
        try:
            row = get_model(db, record.id)
            if row is None:
                raise LookupError("model not found")
            row.pricing_image_gen = record.pricing_image_gen
            row.pricing_web_search = record.pricing_web_search
            row.updated_at = datetime.utcnow()
            db.commit()
        except Exception as e:
            db.rollback()
            result.failed += 1
            result.errors.append(f"{record.id}: {e}")
            logger.warning("[catalog] Capability update failed for %s: %s", record.id, e)
            continue
        result.successful += 1
        result.updated_ids.append(record.id)

    return result


class SqlModelStore:
    """ModelStore over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def get_current_models(self) -> List[ModelCapabilityRecord]:
        return get_enabled_models(self.db)

    def bulk_upsert_capabilities(self, records: Sequence[ModelCapabilityRecord]) -> BulkUpdateResult:
        return bulk_update_model_capabilities(self.db, records)
