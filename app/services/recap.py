"""
AI recap: one short, witty paragraph about a day's scores.

Calls the Gemini `generateContent` REST endpoint over httpx. Failures are
raised as SummaryGenerationError and never retried here; the caller decides
whether to offer "try again".

Public API
----------
build_scores_text(submissions)              -> str
generate_recap(submissions, client=None)    -> str
generate_day_summary(db, group_id, day, submissions, client=None) -> DaySummary
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Optional

import httpx
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import SummaryGenerationError
from app.models.day_summary import DaySummary, SummaryStatus
from app.models.submission import FAILED_SCORE
from app.services import store
from app.services.stats import rank_day_results

logger = logging.getLogger(__name__)

_PROMPT = """
You are a witty and slightly sarcastic sports commentator for the game of Wordle.
Analyze the following daily Wordle scores from a group of friends and provide a short, funny summary (2-3 sentences).
Feel free to gently roast the player with the worst score or praise the winner.
Do not reveal the actual word.

Today's scores: {scores}
"""


def _score_display(score: int) -> str:
    return "X/6 (Failed)" if score >= FAILED_SCORE else f"{score}/6"


def build_scores_text(submissions: Iterable[Any]) -> str:
    """'Ana: 3/6, Ben: X/6 (Failed)' in ranked order."""
    return ", ".join(
        f"{s.player}: {_score_display(s.score)}" for s in rank_day_results(submissions)
    )


def _extract_text(payload: dict) -> str:
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "\n".join(p["text"] for p in parts if p.get("text")).strip()


def generate_recap(
    submissions: Iterable[Any],
    client: Optional[httpx.Client] = None,
) -> str:
    subs = list(submissions)
    if not subs:
        raise SummaryGenerationError("no submissions to summarize")
    if not settings.GEMINI_API_KEY:
        raise SummaryGenerationError("GEMINI_API_KEY is not configured")

    url = f"{settings.GEMINI_API_BASE}/models/{settings.GEMINI_MODEL}:generateContent"
    body = {
        "contents": [
            {"role": "user", "parts": [{"text": _PROMPT.format(scores=build_scores_text(subs))}]}
        ],
        "generationConfig": {"temperature": 0.9, "maxOutputTokens": 256},
    }

    own_client = client is None
    http = client or httpx.Client(timeout=settings.HTTP_TIMEOUT)
    try:
        r = http.post(url, params={"key": settings.GEMINI_API_KEY}, json=body)
        r.raise_for_status()
        text = _extract_text(r.json())
    except httpx.HTTPStatusError as exc:
        logger.error("Gemini returned HTTP %s: %s",
                     exc.response.status_code, exc.response.text[:400])
        raise SummaryGenerationError(f"Gemini HTTP {exc.response.status_code}") from exc
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("Gemini request failed: %s", exc)
        raise SummaryGenerationError(str(exc)) from exc
    finally:
        if own_client:
            http.close()

    if not text:
        raise SummaryGenerationError("empty response from Gemini")
    return text


def generate_day_summary(
    db: Session,
    group_id: int,
    day: date,
    submissions: Iterable[Any],
    client: Optional[httpx.Client] = None,
) -> DaySummary:
    """
    Generate and cache the recap for a day.

    An existing succeeded summary is returned as-is. Otherwise the row is
    marked "started", then "succeeded" with text or "failed" with the reason.
    """
    existing = store.get_summary(db, group_id, day)
    if existing is not None and existing.status == SummaryStatus.succeeded.value and existing.text:
        return existing

    store.put_summary(db, group_id, day, None, status=SummaryStatus.started)
    try:
        text = generate_recap(submissions, client=client)
    except SummaryGenerationError as exc:
        store.put_summary(
            db, group_id, day, None,
            status=SummaryStatus.failed,
            error_message=exc.details.get("reason"),
        )
        raise
    return store.put_summary(db, group_id, day, text, status=SummaryStatus.succeeded)
