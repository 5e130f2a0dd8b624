from datetime import datetime, date
from sqlalchemy import Integer, String, DateTime, Date, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

EMOJI_CHOICES = ["🎉", "🔥", "👏", "💀", "😅", "🤯", "🤝", "🍀", "🧠", "🏆"]


class Reaction(Base):
    """Emoji reaction posted on a revealed day. Append-only."""

    __tablename__ = "reactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    emoji: Mapped[str] = mapped_column(String(16), nullable=False)
    posted_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
