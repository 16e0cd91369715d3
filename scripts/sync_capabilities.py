# FILE: scripts/sync_capabilities.py
"""Sync model capabilities from the static mapping via the running service.

Usage:
    python scripts/sync_capabilities.py
    python scripts/sync_capabilities.py --preview
    python scripts/sync_capabilities.py --base-url http://localhost:8000

--preview: Only preview changes without applying them
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from urllib import error as urllib_error, request as urllib_request

from dotenv import load_dotenv

_project_root = Path(__file__).parent.parent

# .env.local wins over .env
load_dotenv(_project_root / ".env.local")
load_dotenv(_project_root / ".env")

DEFAULT_BASE_URL = os.getenv("CAPSYNC_BASE_URL", "http://localhost:8000")
MAX_LISTED = 15


def call_sync_endpoint(base_url: str, api_key: str, preview: bool, timeout: int = 120) -> Tuple[Optional[int], Optional[Dict[str, Any]], str]:
    """
    GET (preview) or POST (apply) /api/models/sync-capabilities.

    Returns: (status_code, response_data, error_message)
    """
    url = f"{base_url.rstrip('/')}/api/models/sync-capabilities"
    req = urllib_request.Request(
        url,
        headers={"x-api-key": api_key, "Content-Type": "application/json"},
        method="GET" if preview else "POST",
    )
    try:
        with urllib_request.urlopen(req, timeout=timeout) as resp:
            body = resp.read().decode("utf-8", errors="replace")
            return resp.getcode() or 200, json.loads(body), ""
    except urllib_error.HTTPError as e:
        try:
            body = e.read().decode("utf-8", errors="replace")
        except Exception:
            body = str(e)
        return e.code, None, body
    except urllib_error.URLError as e:
        return None, None, f"Connection failed: {e.reason}"
    except json.JSONDecodeError as e:
        return None, None, f"Invalid JSON response: {e}"


def _fmt(value: Optional[float]) -> str:
    return "null" if value is None else str(value)


def print_preview(data: Dict[str, Any]) -> None:
    print("\nPreview Results:")
    print("=" * 60)
    print(f"Source: {data['source']} (v{data.get('mapping_version')})")
    print(f"Total models: {data['total_models']}")
    print(f"In capability mapping: {data['in_source']}")
    print(f"Will update: {data['updated_count']}")
    print(f"Unchanged: {data['unchanged_count']}")

    to_update = [d for d in data.get("diffs") or [] if d["will_update"]]
    if to_update:
        print("\nChanges that would be applied:")
        for item in to_update[:MAX_LISTED]:
            print(f"\n  {item['id']}:")
            current, desired = item["current"], item["desired"]
            if "pricing_image_gen" in item["changed_fields"]:
                print(f"    Image Gen: {_fmt(current['pricing_image_gen'])} -> {_fmt(desired['pricing_image_gen'])}")
            if "pricing_web_search" in item["changed_fields"]:
                print(f"    Web Search: {_fmt(current['pricing_web_search'])} -> {_fmt(desired['pricing_web_search'])}")
        if len(to_update) > MAX_LISTED:
            print(f"\n  ... and {len(to_update) - MAX_LISTED} more")

    print("\nRun without --preview to apply changes")


def print_apply(data: Dict[str, Any]) -> None:
    print("\nSync completed!")
    print("=" * 60)
    print(f"Source: {data['source']} (v{data.get('mapping_version')})")
    print(f"Total models: {data['total_models']}")
    print(f"In mapping: {data['in_source']}")
    print(f"Updated: {data['updated_count']}")
    print(f"Unchanged: {data['unchanged_count']}")
    print(f"Failed: {data['failed_count']}")

    updated = data.get("updated_models") or []
    if updated:
        print("\nUpdated models:")
        for item in updated[:MAX_LISTED]:
            caps = []
            if item["pricing_image_gen"] is not None:
                caps.append(f"ImageGen=${item['pricing_image_gen']}")
            if item["pricing_web_search"] is not None:
                caps.append(f"WebSearch=${item['pricing_web_search']}")
            print(f"  {item['id']}: {', '.join(caps) or 'no capabilities'}")
        if len(updated) > MAX_LISTED:
            print(f"  ... and {len(updated) - MAX_LISTED} more")

    for err in data.get("errors") or []:
        print(f"  ! {err}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Sync model capabilities from the static mapping")
    parser.add_argument("--preview", action="store_true", help="Only preview changes without applying them")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Service base URL")
    args = parser.parse_args(argv)

    api_key = os.getenv("MODELS_SYNC_API_KEY")
    if not api_key:
        print("MODELS_SYNC_API_KEY not found in environment variables", file=sys.stderr)
        return 1

    print(f"{'Previewing' if args.preview else 'Syncing'} model capabilities...")
    print(f"Endpoint: {args.base_url.rstrip('/')}/api/models/sync-capabilities")

    status, data, error = call_sync_endpoint(args.base_url, api_key, args.preview)
    if data is None or status is None or status >= 400:
        print(f"Error ({status}): {error}", file=sys.stderr)
        return 1

    if args.preview:
        print_preview(data)
    else:
        print_apply(data)

    print(f"\nTimestamp: {data['timestamp']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
