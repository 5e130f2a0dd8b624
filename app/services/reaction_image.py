"""
Reaction GIF lookup via the Giphy search API.

Never raises: a missing key, an HTTP error or an empty result all yield None,
and callers simply show nothing.
"""
from __future__ import annotations

import logging
import random
from typing import Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

WIN_TERMS = ["wordle win", "success", "celebration", "nailed it", "genius"]
LOSE_TERMS = ["wordle fail", "so close", "disappointed", "try again tomorrow"]


def find_reaction_gif(
    is_winner: bool,
    client: Optional[httpx.Client] = None,
    rng: Optional[random.Random] = None,
) -> Optional[str]:
    if not settings.GIPHY_API_KEY:
        logger.warning("GIPHY_API_KEY is not set; skipping reaction image")
        return None

    pick = (rng or random).choice
    params = {
        "api_key": settings.GIPHY_API_KEY,
        "q": pick(WIN_TERMS if is_winner else LOSE_TERMS),
        "limit": 25,
        "offset": 0,
        "rating": "g",
        "lang": "en",
    }

    own_client = client is None
    http = client or httpx.Client(timeout=settings.HTTP_TIMEOUT)
    try:
        r = http.get(f"{settings.GIPHY_API_BASE}/gifs/search", params=params)
        r.raise_for_status()
        results = r.json().get("data") or []
        if not results:
            return None
        return pick(results)["images"]["original"]["url"]
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
        logger.warning("Giphy lookup failed: %s", exc)
        return None
    finally:
        if own_client:
            http.close()
