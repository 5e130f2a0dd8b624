from datetime import datetime, date
from sqlalchemy import Integer, String, Text, DateTime, Date, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

FAILED_SCORE = 7


class Submission(Base):
    """
    One player's result for one day.

    score: 1-6 guesses, FAILED_SCORE (7) for an unsolved puzzle ("X").
    grid:  newline-joined rows of square emoji, variation selectors stripped.

    Uniqueness: (group_id, player, day). Resubmitting overwrites the row.
    """

    __tablename__ = "submissions"
    __table_args__ = (
        UniqueConstraint("group_id", "player", "day", name="uq_submission_group_player_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    player: Mapped[str] = mapped_column(String(64), nullable=False)
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    grid: Mapped[str] = mapped_column(Text, nullable=False, default="")
    puzzle_number: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    @property
    def is_win(self) -> bool:
        return self.score < FAILED_SCORE

    @property
    def score_display(self) -> str:
        return "X" if self.score >= FAILED_SCORE else str(self.score)
