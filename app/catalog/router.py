# file: app/catalog/router.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth import require_sync_key
from app.catalog import schemas, service
from app.db import get_db

router = APIRouter(
    prefix="/api/models",
    tags=["catalog"],
    dependencies=[Depends(require_sync_key)],
)


@router.get("", response_model=List[schemas.ModelOut])
def list_enabled_models(db: Session = Depends(get_db)):
    return service.list_models(db, enabled_only=True)


@router.post("")
def upsert_catalog_models(items: List[schemas.ModelIn], db: Session = Depends(get_db)):
    count = service.upsert_models(db, items)
    return {"success": True, "count": count}
