# FILE: app/capabilities/scraper.py
"""
Best-effort capability extraction from the public gateway models page.

Fallback source only - the page layout is not a contract. Two strategies:

  A. Structured payload: the page's embedded __NEXT_DATA__ JSON.
  B. Raw markup: <tr> rows that link to /ai-gateway/models/<slug>.

choose_strategy() runs A and only falls back to B when A produced nothing.
Every function here returns a ScrapeResult (records + error strings) and never
raises on malformed input or network failure.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from urllib import error as urllib_error
from urllib import request as urllib_request

from app.capabilities.config import (
    MODELS_PAGE_PATH,
    MODELS_PAGE_URL,
    SCRAPER_REVALIDATE_SEC,
    SCRAPER_TIMEOUT_SEC,
    SCRAPER_USER_AGENT,
)
from app.capabilities.errors import SyncSourceError
from app.capabilities.pricing import parse_pricing
from app.capabilities.types import (
    EMPTY_CAPABILITIES,
    CapabilityKind,
    CapabilityRecord,
    ModelCapabilityRecord,
)

logger = logging.getLogger(__name__)

STRATEGY_PAYLOAD = "payload"
STRATEGY_MARKUP = "markup"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ScrapeResult:
    models: List[ModelCapabilityRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=_utcnow)
    strategy: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "models": [m.to_dict() for m in self.models],
            "errors": list(self.errors),
            "timestamp": self.timestamp.isoformat(),
            "strategy": self.strategy,
        }


# =============================================================================
# Fetch boundary
# =============================================================================

@dataclass
class PageResponse:
    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def fetch_external_page(
    url: str,
    headers: Optional[Dict[str, str]] = None,
    revalidate_sec: int = SCRAPER_REVALIDATE_SEC,
    timeout: int = SCRAPER_TIMEOUT_SEC,
) -> PageResponse:
    """
    GET a page. HTTP error statuses come back as a PageResponse; transport
    failures raise urllib_error.URLError for the caller to record.
    """
    req_headers = {"Cache-Control": f"max-age={revalidate_sec}"}
    req_headers.update(headers or {})
    req = urllib_request.Request(url, headers=req_headers, method="GET")
    try:
        with urllib_request.urlopen(req, timeout=timeout) as resp:
            body = resp.read().decode("utf-8", errors="replace")
            return PageResponse(status=resp.getcode() or 200, body=body)
    except urllib_error.HTTPError as e:
        try:
            body = e.read().decode("utf-8", errors="replace")
        except Exception:
            body = ""
        return PageResponse(status=e.code, body=body)


# =============================================================================
# Strategy A - structured payload
# =============================================================================

# Candidate locations of the models list, highest priority first
PAYLOAD_MODEL_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("props", "pageProps", "models"),
    ("props", "pageProps", "data", "models"),
    ("pageProps", "models"),
    ("data", "models"),
    ("models",),
)

_NEXT_DATA_RE = re.compile(
    r'<script[^>]*id="__NEXT_DATA__"[^>]*>(.*?)</script>',
    re.DOTALL,
)


def _dig(payload: Any, path: Sequence[str]) -> Any:
    node = payload
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _signal(entry: Mapping[str, Any], key: str) -> Any:
    """Flat field first, then capabilities.<key>."""
    value = entry.get(key)
    if value is None:
        nested = entry.get("capabilities")
        if isinstance(nested, Mapping):
            value = nested.get(key)
    return value


def find_payload_models(payload: Any) -> List[Any]:
    """First non-empty models list found at PAYLOAD_MODEL_PATHS, else []."""
    for path in PAYLOAD_MODEL_PATHS:
        candidate = _dig(payload, path)
        if isinstance(candidate, list) and candidate:
            return candidate
    return []


def extract_from_payload(payload: Any) -> ScrapeResult:
    """Strategy A. A structural failure discards everything and records one error."""
    result = ScrapeResult(strategy=STRATEGY_PAYLOAD)
    models: List[ModelCapabilityRecord] = []

    try:
        for entry in find_payload_models(payload):
            if not isinstance(entry, Mapping):
                continue
            model_id = entry.get("id")
            if not isinstance(model_id, str) or not model_id:
                continue
            models.append(ModelCapabilityRecord(
                id=model_id,
                pricing_image_gen=parse_pricing(_signal(entry, "imageGen")),
                pricing_web_search=parse_pricing(_signal(entry, "webSearch")),
            ))
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.debug("[capabilities.scraper] Payload traversal aborted: %s", e)
        result.errors.append(f"Failed to extract from page data: {e}")
        return result

    result.models = models
    return result


def extract_next_data(markup: str) -> Tuple[Optional[Any], List[str]]:
    """Locate and decode the __NEXT_DATA__ blob. Returns (payload or None, errors)."""
    match = _NEXT_DATA_RE.search(markup)
    if not match:
        return None, []
    try:
        return json.loads(match.group(1)), []
    except json.JSONDecodeError as e:
        return None, [f"Failed to parse Next.js data: {e}"]


# =============================================================================
# Strategy B - raw markup
# =============================================================================

# One row per match; neither gap may cross a row end
_ROW_RE = re.compile(
    r'<tr[^>]*>(?:(?!</tr>)[\s\S])*?<a[^>]*href="' + re.escape(MODELS_PAGE_PATH)
    + r'([^"]+)"[^>]*>(?:(?!</tr>)[\s\S])*?</tr>',
    re.IGNORECASE,
)

# Ordered; first match wins
PROVIDER_PATTERNS: Tuple[Tuple["re.Pattern[str]", str], ...] = (
    (re.compile(r"openai|gpt", re.IGNORECASE), "openai"),
    (re.compile(r"anthropic|claude", re.IGNORECASE), "anthropic"),
    (re.compile(r"google|gemini", re.IGNORECASE), "google"),
    (re.compile(r"xai|grok", re.IGNORECASE), "xai"),
    (re.compile(r"meta|llama", re.IGNORECASE), "meta"),
    (re.compile(r"mistral", re.IGNORECASE), "mistral"),
    (re.compile(r"deepseek", re.IGNORECASE), "deepseek"),
)

SLUG_PREFIXES: Tuple[Tuple[str, str], ...] = (
    ("gpt-", "openai"),
    ("claude-", "anthropic"),
    ("gemini-", "google"),
    ("grok-", "xai"),
)

_IMAGE_GEN_RE = re.compile(r"image[\s-]?gen", re.IGNORECASE)
_WEB_SEARCH_RE = re.compile(r"web[\s-]?search", re.IGNORECASE)
_NEGATION_RE = re.compile("—|\\bnone\\b|\\bno\\b", re.IGNORECASE)
_PRICE_RE = re.compile(r"\$(\d+\.?\d*)")


def infer_model_id(slug: str, row: str) -> Optional[str]:
    """Provider keyword in the row, then well-known slug prefixes. None if neither."""
    for pattern, provider in PROVIDER_PATTERNS:
        if pattern.search(row):
            return f"{provider}/{slug}"
    for prefix, provider in SLUG_PREFIXES:
        if slug.startswith(prefix):
            return f"{provider}/{slug}"
    return None


def extract_row_price(row: str) -> Optional[float]:
    """First $-prefixed number in the row."""
    match = _PRICE_RE.search(row)
    if not match:
        return None
    return parse_pricing(match.group(1))


def extract_from_markup(markup: str) -> ScrapeResult:
    """
    Strategy B. Rows without a recognisable provider are skipped silently.

    The row regex cannot tell which column a price sits in, so a row that
    mentions both capabilities gets the same (first) price for both.
    """
    result = ScrapeResult(strategy=STRATEGY_MARKUP)

    for match in _ROW_RE.finditer(markup):
        slug, row = match.group(1), match.group(0)
        model_id = infer_model_id(slug, row)
        if not model_id:
            continue

        negated = bool(_NEGATION_RE.search(row))
        has_image_gen = bool(_IMAGE_GEN_RE.search(row)) and not negated
        has_web_search = bool(_WEB_SEARCH_RE.search(row)) and not negated
        price = extract_row_price(row)

        result.models.append(ModelCapabilityRecord(
            id=model_id,
            pricing_image_gen=price if has_image_gen else None,
            pricing_web_search=price if has_web_search else None,
        ))

    return result


# =============================================================================
# Pipeline
# =============================================================================

def choose_strategy(payload: Any, markup: str, errors: Optional[List[str]] = None) -> ScrapeResult:
    """Strategy A when it yields at least one record, otherwise strategy B."""
    carried = list(errors or [])

    if payload is not None:
        from_payload = extract_from_payload(payload)
        carried.extend(from_payload.errors)
        if from_payload.models:
            from_payload.errors = carried
            return from_payload

    from_markup = extract_from_markup(markup)
    from_markup.errors = carried + from_markup.errors
    return from_markup


def scrape_models_page(
    url: Optional[str] = None,
    fetch: Callable[..., PageResponse] = fetch_external_page,
) -> ScrapeResult:
    """Fetch the models page and extract capability records. Never raises."""
    target = url or MODELS_PAGE_URL
    try:
        response = fetch(target, headers={"User-Agent": SCRAPER_USER_AGENT})
        if not response.ok:
            raise SyncSourceError(f"Failed to fetch models page: HTTP {response.status}")

        payload, errors = extract_next_data(response.body)
        result = choose_strategy(payload, response.body, errors)
    except Exception as e:
        logger.warning("[capabilities.scraper] Scrape of %s failed: %s", target, e)
        return ScrapeResult(errors=[f"Scraping failed: {e}"])

    logger.info(
        "[capabilities.scraper] Extracted %d models via %s (%d errors)",
        len(result.models), result.strategy, len(result.errors),
    )
    return result


# =============================================================================
# Desired-source adapter
# =============================================================================

class ScrapedCapabilitySource:
    """Desired-state source over a ScrapeResult. First record for an id wins."""

    name = "scraped"
    version = None

    def __init__(self, result: ScrapeResult):
        self.result = result
        self._records: Dict[str, CapabilityRecord] = {}
        for record in result.models:
            self._records.setdefault(record.id, record.capabilities)

    @classmethod
    def from_result(cls, result: ScrapeResult) -> "ScrapedCapabilitySource":
        """Reject an empty scrape so it cannot be mistaken for 'no capabilities anywhere'."""
        if not result.models:
            detail = "; ".join(result.errors) or "no models extracted"
            raise SyncSourceError(f"Scrape produced no usable records: {detail}")
        return cls(result)

    def __len__(self) -> int:
        return len(self._records)

    def lookup(self, model_id: str) -> CapabilityRecord:
        return self._records.get(model_id, EMPTY_CAPABILITIES)

    def has_entry(self, model_id: str) -> bool:
        return model_id in self._records

    def models_with_capability(self, kind: Union[CapabilityKind, str]) -> List[str]:
        field_name = CapabilityKind(kind).field
        return [
            model_id
            for model_id, caps in self._records.items()
            if caps.get(field_name) is not None
        ]
