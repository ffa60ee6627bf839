"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBPlayer(Base):
    __tablename__ = "players"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    token_identifier: Mapped[str] = mapped_column(unique=True, index=True)
    name: Mapped[Optional[str]]
    username: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    player1: Mapped[UUID] = mapped_column(index=True)
    player2: Mapped[Optional[UUID]] = mapped_column(index=True)
    invited_player: Mapped[Optional[UUID]] = mapped_column(index=True)
    board: Mapped[str]
    moved_squares: Mapped[list[str]] = mapped_column(JSON, default=list)
    move_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    current_turn: Mapped[str]
    is_check: Mapped[bool] = mapped_column(default=False)
    is_checkmate: Mapped[bool] = mapped_column(default=False)
    status: Mapped[str] = mapped_column(index=True)
    winner: Mapped[Optional[UUID]]
    started_at: Mapped[datetime]
    completed_at: Mapped[Optional[datetime]]
    version: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBNotification(Base):
    __tablename__ = "notifications"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    recipient_id: Mapped[UUID] = mapped_column(ForeignKey("players.id"), index=True)
    actor_id: Mapped[Optional[UUID]] = mapped_column(ForeignKey("players.id"))
    type: Mapped[str]
    message: Mapped[str]
    is_read: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
