import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Trip(Base):
    __tablename__ = "trips"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str | None] = mapped_column(String(64), index=True)
    trip_name: Mapped[str] = mapped_column(String(255), nullable=False)
    organizer_name: Mapped[str | None] = mapped_column(String(100))
    date_start: Mapped[date | None] = mapped_column(Date)
    date_end: Mapped[date | None] = mapped_column(Date)
    group_size: Mapped[int] = mapped_column(Integer, default=4)
    geography: Mapped[list[str] | None] = mapped_column(ARRAY(String(50)))
    budget_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    budget_type: Mapped[str | None] = mapped_column(String(20))  # "per_person" | "total"
    pass_types: Mapped[list[str] | None] = mapped_column(ARRAY(String(30)))
    lodging_preference: Mapped[str | None] = mapped_column(String(50))
    skill_min: Mapped[str | None] = mapped_column(String(30))
    skill_max: Mapped[str | None] = mapped_column(String(30))
    vibe: Mapped[str | None] = mapped_column(Text)
    has_non_skiers: Mapped[bool | None] = mapped_column(Boolean)
    non_skier_importance: Mapped[int | None] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    guests: Mapped[list["Guest"]] = relationship(
        back_populates="trip", cascade="all, delete-orphan", order_by="Guest.created_at"
    )


class Guest(Base):
    __tablename__ = "guests"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    origin_city: Mapped[str | None] = mapped_column(String(100))
    # 1-3 comma-separated IATA/ICAO codes, e.g. "JFK,EWR"
    airport_code: Mapped[str | None] = mapped_column(String(20))
    skill_level: Mapped[str | None] = mapped_column(String(30))
    budget_min: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    budget_max: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    status: Mapped[str | None] = mapped_column(String(20), default="pending")
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    trip: Mapped["Trip"] = relationship(back_populates="guests")
