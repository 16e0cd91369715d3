# FILE: main.py
"""
Model Capability Sync - FastAPI Application
Version: 1.0.0

Features:
- Gateway model catalog (list / upsert)
- Capability pricing sync from the static mapping (preview + apply)
- Best-effort scrape of the public gateway models page (fallback source)

All endpoints require the shared secret in the x-api-key header
(MODELS_SYNC_API_KEY).
"""
import os

from fastapi import FastAPI
from dotenv import load_dotenv

# Load .env FIRST before any other imports that might need env vars
load_dotenv()

from app.db import init_db
from app.capabilities.router import router as capabilities_router
from app.capabilities.static_source import default_static_source
from app.catalog.router import router as catalog_router

app = FastAPI(
    title="Model Capability Sync",
    version="1.0.0",
    description="Keeps per-use capability pricing of gateway models in sync",
)


# ====== STARTUP ======

@app.on_event("startup")
def on_startup():
    os.makedirs("data", exist_ok=True)

    init_db()

    print("[startup] Checking environment variables...")
    if os.getenv("MODELS_SYNC_API_KEY"):
        print("[startup] MODELS_SYNC_API_KEY: [OK] set")
    else:
        print("[startup] MODELS_SYNC_API_KEY: [X] NOT SET - sync endpoints will return 503")

    source = default_static_source()
    print(f"[startup] Static capability mapping: v{source.version} ({len(source)} models)")


# ====== ROUTERS ======

app.include_router(capabilities_router)
app.include_router(catalog_router)


@app.get("/health")
def health():
    return {"ok": True, "service": "capability-sync"}
