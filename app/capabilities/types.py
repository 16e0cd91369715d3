# FILE: app/capabilities/types.py
"""Capability record types shared by the extractors, reconciler and sync.

Absence (None) is a first-class value: it means "not supported or unknown"
and is never equal to a price of 0.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional

# v1 field set. Diffing and equality iterate this tuple.
CAPABILITY_FIELDS = ("pricing_image_gen", "pricing_web_search")


class CapabilityKind(str, Enum):
    IMAGE_GEN = "imageGen"
    WEB_SEARCH = "webSearch"

    @property
    def field(self) -> str:
        return {
            CapabilityKind.IMAGE_GEN: "pricing_image_gen",
            CapabilityKind.WEB_SEARCH: "pricing_web_search",
        }[self]


@dataclass(frozen=True)
class CapabilityRecord:
    """Per-use capability pricing for one model (no id)."""
    pricing_image_gen: Optional[float] = None
    pricing_web_search: Optional[float] = None

    def get(self, name: str) -> Optional[float]:
        return getattr(self, name)

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {name: self.get(name) for name in CAPABILITY_FIELDS}


EMPTY_CAPABILITIES = CapabilityRecord()


@dataclass(frozen=True)
class ModelCapabilityRecord:
    """A model id plus its capability pricing."""
    id: str
    pricing_image_gen: Optional[float] = None
    pricing_web_search: Optional[float] = None

    @property
    def provider(self) -> str:
        return self.id.split("/", 1)[0]

    @property
    def capabilities(self) -> CapabilityRecord:
        return CapabilityRecord(
            pricing_image_gen=self.pricing_image_gen,
            pricing_web_search=self.pricing_web_search,
        )

    @classmethod
    def from_capabilities(cls, model_id: str, caps: CapabilityRecord) -> "ModelCapabilityRecord":
        return cls(id=model_id, **caps.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def fields_equal(a: Optional[float], b: Optional[float]) -> bool:
    """Absence-aware equality: None equals only None, a number only the same number."""
    if a is None or b is None:
        return a is None and b is None
    return a == b
