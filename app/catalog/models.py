# app/catalog/models.py
"""
SQLAlchemy ORM model for the gateway model catalog.

Capability pricing columns are nullable on purpose: NULL means the model
does not support the capability, which is different from a price of 0.
"""

from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text
from app.db import Base


class CatalogModel(Base):
    __tablename__ = "models"

    id = Column(String(128), primary_key=True)  # "<provider>/<model-name>"
    name = Column(String(128), nullable=False)
    provider = Column(String(64), nullable=False, index=True)
    description = Column(Text, nullable=True)
    model_type = Column(String(32), nullable=True)
    context_window = Column(Integer, nullable=True)

    # Per-token pricing
    pricing_input = Column(Float, nullable=True)
    pricing_output = Column(Float, nullable=True)

    # Per-use capability pricing (NULL = not supported)
    pricing_image_gen = Column(Float, nullable=True)
    pricing_web_search = Column(Float, nullable=True)

    is_enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
