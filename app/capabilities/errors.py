# FILE: app/capabilities/errors.py
class CapabilitySyncError(Exception):
    """Base class for capability sync errors."""


class SyncSourceError(CapabilitySyncError):
    """Raised when a desired-state source cannot be built."""
