"""
Custom exception hierarchy for Wordle Escrow.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class EscrowException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ShareTextParseError(EscrowException):
    """Pasted share text could not be turned into a result."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "PARSE_ERROR"


class MissingHeaderError(ShareTextParseError):
    code = "MISSING_HEADER"

    def __init__(self):
        super().__init__(
            message="No Wordle header found. Paste the full share text, "
                    "starting with a line like 'Wordle 1,234 4/6'.",
        )


class GarbledHeaderError(ShareTextParseError):
    code = "GARBLED_HEADER"

    def __init__(self, line: str):
        super().__init__(
            message="The Wordle header looks incomplete or garbled. "
                    "Expected '<puzzle number> <1-6 or X>/6'.",
            details={"line": line},
        )


class GroupNotFoundError(EscrowException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "GROUP_NOT_FOUND"

    def __init__(self, group_id: int):
        super().__init__(
            message=f"Group {group_id} not found.",
            details={"group_id": group_id},
        )


class RosterTooLargeError(EscrowException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "ROSTER_TOO_LARGE"

    def __init__(self, max_players: int, received: int):
        super().__init__(
            message=f"A group can have at most {max_players} players. Received {received}.",
            details={"max_players": max_players, "received": received},
        )


class InvalidRosterError(EscrowException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_ROSTER"

    def __init__(self, message: str, player: str | None = None):
        super().__init__(
            message=message,
            details={"player": player} if player else {},
        )


class PlayerNotInRosterError(EscrowException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "PLAYER_NOT_IN_ROSTER"

    def __init__(self, player: str, group_id: int):
        super().__init__(
            message=f"'{player}' is not on the roster of group {group_id}.",
            details={"player": player, "group_id": group_id},
        )


class ResultsEscrowedError(EscrowException):
    http_status = status.HTTP_409_CONFLICT
    code = "RESULTS_ESCROWED"

    def __init__(self, day: date):
        super().__init__(
            message=f"Results for {day} are still in escrow.",
            details={"day": str(day)},
        )


class InvalidReactionError(EscrowException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_REACTION"

    def __init__(self, emoji: str, allowed: list[str]):
        super().__init__(
            message=f"Unsupported reaction '{emoji}'.",
            details={"emoji": emoji, "allowed": allowed},
        )


class StoreWriteError(EscrowException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORE_UNAVAILABLE"

    def __init__(self, reason: str | None = None):
        super().__init__(
            message="Your submission was not saved. Your local view is ahead "
                    "of the server; please retry.",
            details={"reason": reason} if reason else {},
        )


class SummaryGenerationError(EscrowException):
    http_status = status.HTTP_502_BAD_GATEWAY
    code = "SUMMARY_GENERATION_FAILED"

    def __init__(self, reason: str):
        super().__init__(
            message="Recap generation failed. Try again.",
            details={"reason": reason},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


async def escrow_exception_handler(request: Request, exc: EscrowException) -> JSONResponse:
    if exc.http_status >= 500:
        logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.code, exc.details)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Structured 422 with one entry per offending field."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": _field_errors(exc)},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "INTERNAL_ERROR", "message": "An unexpected error occurred."},
    )
