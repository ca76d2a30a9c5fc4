"""SQLAlchemy database models."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from batch_engine.app.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BatchStrategyRecord(Base):
    """Current batch plan of one dish at one event."""

    __tablename__ = "batch_strategies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    event_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dish_name: Mapped[str] = mapped_column(String(255), nullable=False)
    dish_category: Mapped[str] = mapped_column(String(50), nullable=False)
    total_portions: Mapped[int] = mapped_column(Integer, nullable=False)
    batch1_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    batch2_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    batch3_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    batch1_start_time: Mapped[str] = mapped_column(String(255), nullable=False)
    batch2_timing: Mapped[str] = mapped_column(Text, nullable=False)
    trigger_condition: Mapped[str] = mapped_column(Text, nullable=False)
    risk_level: Mapped[str] = mapped_column(String(20), nullable=False)
    risk_score: Mapped[int] = mapped_column(Integer, nullable=False)
    adjustment_strategy: Mapped[str] = mapped_column(Text, nullable=False)
    cooking_timing_suggestion: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        UniqueConstraint("event_id", "dish_name", name="uix_strategy_event_dish"),
        # ids are never reused, so a rebuilt plan never matches a stale one
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<BatchStrategyRecord(event_id={self.event_id}, dish='{self.dish_name}', "
            f"batches={self.batch1_quantity}/{self.batch2_quantity}/{self.batch3_quantity})>"
        )


class BatchProgressRecord(Base):
    """Kitchen progress of one dish; survives reconnects and multiple kitchen devices."""

    __tablename__ = "batch_progress"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    event_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    dish_name: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str] = mapped_column(String(32), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        UniqueConstraint("event_id", "dish_name", name="uix_progress_event_dish"),
    )

    def __repr__(self) -> str:
        return f"<BatchProgressRecord(event_id={self.event_id}, dish='{self.dish_name}', state={self.state})>"


class EventAlertRecord(Base):
    """Live alert line shown on the event dashboard."""

    __tablename__ = "event_alerts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    event_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    dish_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<EventAlertRecord(event_id={self.event_id}, message='{self.message[:40]}')>"
