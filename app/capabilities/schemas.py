# FILE: app/capabilities/schemas.py
"""
Capability sync Pydantic schemas (HTTP responses).
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CapabilityValues(BaseModel):
    pricing_image_gen: Optional[float] = None
    pricing_web_search: Optional[float] = None


class CapabilityUpdate(CapabilityValues):
    id: str


class CapabilityDiffOut(BaseModel):
    id: str
    current: CapabilityValues
    desired: CapabilityValues
    changed_fields: List[str] = Field(default_factory=list)
    will_update: bool
    in_source: bool


class SyncReport(BaseModel):
    success: bool = True
    mode: Literal["preview", "apply"]
    source: str
    mapping_version: Optional[str] = None

    total_models: int
    in_source: int
    source_size: int
    updated_count: int
    unchanged_count: int
    not_in_source_count: int
    failed_count: int

    updated_models: List[CapabilityUpdate] = Field(default_factory=list)
    not_in_source: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    # Preview only
    diffs: Optional[List[CapabilityDiffOut]] = None

    timestamp: datetime


class CapabilityListOut(BaseModel):
    kind: str
    source: str
    models: List[str]


class ScrapedModelOut(CapabilityValues):
    id: str


class ScrapeResultOut(BaseModel):
    models: List[ScrapedModelOut]
    errors: List[str]
    strategy: Optional[str] = None
    timestamp: datetime
