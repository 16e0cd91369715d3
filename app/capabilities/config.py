# FILE: app/capabilities/config.py
"""Configuration constants for capability sync and the fallback scraper."""

from __future__ import annotations

import os
from typing import Optional

# =============================================================================
# SYNC
# =============================================================================

SYNC_API_KEY_ENV = "MODELS_SYNC_API_KEY"
SYNC_API_KEY_HEADER = "x-api-key"

# How many "not in source" ids a report lists
SYNC_REPORT_ID_LIMIT = int(os.getenv("SYNC_REPORT_ID_LIMIT", "20"))


def get_sync_api_key() -> Optional[str]:
    """Shared secret for the sync endpoints. Read per request, empty means unset."""
    return os.getenv(SYNC_API_KEY_ENV) or None


# =============================================================================
# SCRAPER (fallback source)
# =============================================================================

MODELS_PAGE_URL = os.getenv("MODELS_PAGE_URL", "https://vercel.com/ai-gateway/models")
MODELS_PAGE_PATH = "/ai-gateway/models/"

SCRAPER_USER_AGENT = os.getenv(
    "SCRAPER_USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
)

# Reuse window hint for the page fetch (sent as Cache-Control max-age)
SCRAPER_REVALIDATE_SEC = int(os.getenv("SCRAPER_REVALIDATE_SEC", "3600"))
SCRAPER_TIMEOUT_SEC = int(os.getenv("SCRAPER_TIMEOUT_SEC", "30"))
