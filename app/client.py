"""
Python client for the escrow API with optimistic local writes.

    client = EscrowClient(httpx.Client(base_url="https://escrow.example.com"))
    outcome = client.submit(group_id=1, player="Joe", share_text=text)
    if outcome.ahead_of_server:
        ...  # tell the user to retry; their result is still shown locally

Submissions are parsed locally first, so a bad paste fails before any request.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

import httpx

from app.services.escrow import reference_today
from app.services.history import DailyResultSet, History, HistorySnapshot
from app.services.overlay import StagedHistory, SubmissionRecord
from app.services.parsing import parse_share_text
from app.services.reveal import now_utc

logger = logging.getLogger(__name__)


@dataclass
class SubmitOutcome:
    record: SubmissionRecord
    saved: bool
    ahead_of_server: bool
    error_code: Optional[str] = None
    error_message: Optional[str] = None


def _snapshot_from_json(group_id: int, body: dict) -> HistorySnapshot:
    history: History = {}
    for day_json in body.get("days", []):
        day = date.fromisoformat(day_json["date"])
        result_set = DailyResultSet(summary=day_json.get("summary"))
        for r in day_json.get("results", []):
            result_set.submissions[r["player"]] = SubmissionRecord(
                player=r["player"],
                day=day,
                score=r["score"],
                grid=r["grid"],
                puzzle_number=r["puzzle_number"],
            )
        history[day] = result_set
    return HistorySnapshot(group_id=group_id, history=history, version=body["version"])


class EscrowClient:
    def __init__(self, http: httpx.Client):
        self.http = http
        self._staged: dict[int, StagedHistory] = {}

    def _overlay(self, group_id: int) -> StagedHistory:
        return self._staged.setdefault(group_id, StagedHistory())

    def refresh(self, group_id: int) -> bool:
        """Pull the revealed history. Returns True when it changed."""
        overlay = self._overlay(group_id)
        params = {"since": overlay.version} if overlay.version else None
        r = self.http.get(f"/groups/{group_id}/history", params=params)
        r.raise_for_status()
        body = r.json()
        if not body.get("changed", True):
            return False
        overlay.reconcile(_snapshot_from_json(group_id, body))
        return True

    def view(self, group_id: int) -> History:
        return self._overlay(group_id).view()

    def ahead_of_server(self, group_id: int) -> bool:
        return self._overlay(group_id).ahead_of_server

    def submit(
        self,
        group_id: int,
        player: str,
        share_text: str,
        day: Optional[date] = None,
    ) -> SubmitOutcome:
        parsed = parse_share_text(share_text)
        record = SubmissionRecord(
            player=player.strip(),
            day=day or reference_today(now_utc()),
            score=parsed.score,
            grid=parsed.grid,
            puzzle_number=parsed.puzzle_number,
        )
        overlay = self._overlay(group_id)
        key = overlay.stage(record)

        payload = {"player": record.player, "share_text": share_text, "date": record.day.isoformat()}
        try:
            r = self.http.post(f"/groups/{group_id}/submissions", json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Submission for %s not delivered: %s", record.player, exc)
            overlay.mark_failed(key)
            return SubmitOutcome(record, saved=False, ahead_of_server=True, error_message=str(exc))

        if r.is_success:
            overlay.confirm(key, stored_player=r.json()["submission"]["player"])
            return SubmitOutcome(record, saved=True, ahead_of_server=overlay.ahead_of_server)

        body = r.json() if r.headers.get("content-type", "").startswith("application/json") else {}
        code, message = body.get("code"), body.get("message")
        if r.status_code >= 500:
            overlay.mark_failed(key)
            return SubmitOutcome(record, saved=False, ahead_of_server=True,
                                 error_code=code, error_message=message)

        # Rejected outright (bad roster name, unknown group): nothing to retry
        overlay.discard(key)
        return SubmitOutcome(record, saved=False, ahead_of_server=overlay.ahead_of_server,
                             error_code=code, error_message=message)
