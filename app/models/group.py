from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Group(Base):
    """A set of friends sharing one escrowed scoreboard."""

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    members: Mapped[list["GroupMember"]] = relationship(
        back_populates="group",
        order_by="GroupMember.position",
        cascade="all, delete-orphan",
    )

    @property
    def players(self) -> list[str]:
        return [m.player for m in self.members]


class GroupMember(Base):
    """
    One roster slot. `position` keeps the roster in the order it was given.
    Removing a member never touches that player's historical submissions.
    """

    __tablename__ = "group_members"
    __table_args__ = (
        UniqueConstraint("group_id", "player", name="uq_group_member_player"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    player: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    group: Mapped[Group] = relationship(back_populates="members")
