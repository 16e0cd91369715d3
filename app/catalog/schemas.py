# FILE: app/catalog/schemas.py
"""
Catalog Pydantic schemas.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class ModelIn(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    model_type: Optional[str] = "language"
    context_window: Optional[int] = None
    pricing_input: Optional[float] = None
    pricing_output: Optional[float] = None
    is_enabled: bool = True

    @property
    def provider(self) -> str:
        return self.id.split("/", 1)[0]


class ModelOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    provider: str
    description: Optional[str]
    model_type: Optional[str]
    context_window: Optional[int]
    pricing_input: Optional[float]
    pricing_output: Optional[float]
    pricing_image_gen: Optional[float]
    pricing_web_search: Optional[float]
    is_enabled: bool
    created_at: datetime
    updated_at: datetime
