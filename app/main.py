import logging
from datetime import datetime

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import (
    EscrowException,
    escrow_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.core.logging_config import setup_logging
from app.db.base import get_db
from app.routers import groups, recap, stats, submissions
from app.services.escrow import reference_today
from app.services.reveal import now_utc

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Wordle Escrow API",
    description=(
        "**Group Wordle scoreboard with escrowed results**\n\n"
        "Players paste their daily share text. Scores stay hidden until the whole "
        "roster has submitted or the daily cutoff passes; then ranked results, "
        "lifetime stats and head-to-head comparisons unlock.\n\n"
        "Every error body is `{code, message, details}`."
    ),
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(EscrowException, escrow_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

for module in (groups, submissions, stats, recap):
    app.include_router(module.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db), now: datetime = Depends(now_utc)):
    """
    `{"status": "ok", "db": "ok", ...}` when the database answers, HTTP 503
    otherwise. Also reports the reveal clock so deploys with a wrong
    REVEAL_TIMEZONE are easy to spot.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Health check could not reach the database: %s", exc)
        return JSONResponse(status_code=503, content={"status": "error", "db": "unreachable"})

    return {
        "status": "ok",
        "db": "ok",
        "env": settings.APP_ENV,
        "reveal_timezone": settings.REVEAL_TIMEZONE,
        "reference_date": str(reference_today(now)),
    }
