# FILE: config/model_capabilities.py
"""Per-use capability pricing for gateway models - Single source of truth.

Source: https://vercel.com/ai-gateway/models

The gateway's model list API does not publish image generation or web search
pricing, so it is maintained here by hand. Pricing is per use (per image, per
search), NOT per token. None means the capability is not supported.

To update:
  1. Visit https://vercel.com/ai-gateway/models
  2. Find models with Image Gen or Web Search pricing
  3. Update MODEL_CAPABILITIES and bump MAPPING_VERSION
"""

from __future__ import annotations

from typing import Dict, Optional

MAPPING_VERSION = "2026-01-05"

# =============================================================================
# Capability Pricing Mapping (Authoritative Source)
# =============================================================================

MODEL_CAPABILITIES: Dict[str, Dict[str, Optional[float]]] = {
    # -------------------------------------------------------------------------
    # OpenAI - image generation and web search
    # -------------------------------------------------------------------------
    "openai/gpt-5": {"pricing_image_gen": 0.02, "pricing_web_search": 0.025},
    "openai/gpt-5-chat": {"pricing_image_gen": 0.02, "pricing_web_search": 0.025},
    "openai/gpt-5-mini": {"pricing_image_gen": 0.02, "pricing_web_search": 0.025},
    "openai/gpt-5.2": {"pricing_image_gen": 0.02, "pricing_web_search": 0.025},
    "openai/gpt-4o": {"pricing_image_gen": 0.02, "pricing_web_search": None},
    "openai/gpt-4o-mini": {"pricing_image_gen": 0.02, "pricing_web_search": None},

    # -------------------------------------------------------------------------
    # Google - image generation
    # -------------------------------------------------------------------------
    "google/gemini-2.5-flash": {"pricing_image_gen": 0.02, "pricing_web_search": None},
    "google/gemini-2.5-flash-lite": {"pricing_image_gen": 0.02, "pricing_web_search": None},
    "google/gemini-2.5-pro": {"pricing_image_gen": 0.02, "pricing_web_search": None},
    "google/gemini-3-flash": {"pricing_image_gen": 0.02, "pricing_web_search": None},
    "google/gemini-3-pro-preview": {"pricing_image_gen": 0.02, "pricing_web_search": None},
    "google/gemini-3-pro-image": {"pricing_image_gen": 0.02, "pricing_web_search": None},

    # -------------------------------------------------------------------------
    # xAI - web search
    # -------------------------------------------------------------------------
    "xai/grok-3": {"pricing_image_gen": None, "pricing_web_search": 0.05},
    "xai/grok-3-fast": {"pricing_image_gen": None, "pricing_web_search": 0.05},
    "xai/grok-3-mini": {"pricing_image_gen": None, "pricing_web_search": 0.05},
    "xai/grok-4": {"pricing_image_gen": None, "pricing_web_search": 0.05},

    # -------------------------------------------------------------------------
    # Perplexity - search is built in
    # -------------------------------------------------------------------------
    "perplexity/sonar": {"pricing_image_gen": None, "pricing_web_search": 0.005},
    "perplexity/sonar-pro": {"pricing_image_gen": None, "pricing_web_search": 0.005},
    "perplexity/sonar-reasoning": {"pricing_image_gen": None, "pricing_web_search": 0.005},
    "perplexity/sonar-reasoning-pro": {"pricing_image_gen": None, "pricing_web_search": 0.005},
}
