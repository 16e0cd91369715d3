# FILE: app/capabilities/static_source.py
"""
Static capability source backed by the hand-curated mapping.

The mapping is wrapped in an immutable CapabilityMapping and injected into
StaticCapabilitySource, so tests and alternate deployments can supply their
own table instead of the module constant in config/model_capabilities.py.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from app.capabilities.pricing import parse_pricing
from app.capabilities.types import (
    CAPABILITY_FIELDS,
    EMPTY_CAPABILITIES,
    CapabilityKind,
    CapabilityRecord,
)

logger = logging.getLogger(__name__)


class CapabilityMapping(Mapping[str, CapabilityRecord]):
    """Read-only model id -> CapabilityRecord table. Keeps insertion order."""

    def __init__(self, entries: Mapping[str, CapabilityRecord], version: Optional[str] = None):
        self._entries = MappingProxyType(dict(entries))
        self.version = version

    @classmethod
    def from_dict(cls, raw: Mapping[str, Mapping[str, Any]], version: Optional[str] = None) -> "CapabilityMapping":
        """Build from plain dicts. Values go through parse_pricing so no entry holds NaN or infinity."""
        entries: Dict[str, CapabilityRecord] = {}
        for model_id, values in raw.items():
            entries[model_id] = CapabilityRecord(
                **{name: parse_pricing(values.get(name)) for name in CAPABILITY_FIELDS}
            )
        return cls(entries, version=version)

    def __getitem__(self, model_id: str) -> CapabilityRecord:
        return self._entries[model_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class StaticCapabilitySource:
    """Desired-state source that answers from a fixed CapabilityMapping."""

    name = "static-mapping"

    def __init__(self, mapping: CapabilityMapping):
        self._mapping = mapping

    @property
    def version(self) -> Optional[str]:
        return self._mapping.version

    def __len__(self) -> int:
        return len(self._mapping)

    def lookup(self, model_id: str) -> CapabilityRecord:
        """Exact-match lookup. Unknown ids get the all-absent default record."""
        return self._mapping.get(model_id, EMPTY_CAPABILITIES)

    def has_entry(self, model_id: str) -> bool:
        return model_id in self._mapping

    def models_with_capability(self, kind: Union[CapabilityKind, str]) -> List[str]:
        """Model ids with non-absent pricing for `kind`, in mapping order."""
        field_name = CapabilityKind(kind).field
        return [
            model_id
            for model_id, caps in self._mapping.items()
            if caps.get(field_name) is not None
        ]


def default_static_source() -> StaticCapabilitySource:
    """Static source over config.model_capabilities."""
    from config.model_capabilities import MAPPING_VERSION, MODEL_CAPABILITIES

    mapping = CapabilityMapping.from_dict(MODEL_CAPABILITIES, version=MAPPING_VERSION)
    logger.debug("[capabilities] Loaded static mapping v%s (%d models)", mapping.version, len(mapping))
    return StaticCapabilitySource(mapping)
