# FILE: config/__init__.py
"""Configuration package for the capability sync service.

Contains:
- model_capabilities.py: Hand-maintained per-use capability pricing
"""

from config.model_capabilities import (
    MAPPING_VERSION,
    MODEL_CAPABILITIES,
)

__all__ = [
    "MAPPING_VERSION",
    "MODEL_CAPABILITIES",
]
