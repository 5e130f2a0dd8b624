from datetime import datetime, date
from sqlalchemy import Integer, String, Text, DateTime, Date, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from app.db.base import Base


class SummaryStatus(str, enum.Enum):
    started = "started"
    succeeded = "succeeded"
    failed = "failed"


class DaySummary(Base):
    """
    Cached AI recap for a group's day.

    Uniqueness: (group_id, day). Regenerating replaces text and status.
    A failed generation keeps its error_message so clients can offer a retry.
    """

    __tablename__ = "day_summaries"
    __table_args__ = (
        UniqueConstraint("group_id", "day", name="uq_day_summary_group_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[date] = mapped_column(Date, nullable=False)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=SummaryStatus.started.value
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
