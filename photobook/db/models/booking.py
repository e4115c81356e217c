from datetime import date, datetime
from enum import Enum as PyEnum
from sqlalchemy import CheckConstraint, Date, DateTime, Enum, Float, ForeignKey, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class BookingStatus(str, PyEnum):
    pending = "pending"
    confirmed = "confirmed"
    declined = "declined"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class PaymentStatus(str, PyEnum):
    unpaid = "unpaid"
    paid = "paid"


class PackageTier(str, PyEnum):
    silver = "silver"
    gold = "gold"
    platinum = "platinum"


# Statuses that occupy the photographer's calendar
ACTIVE_STATUSES = frozenset(
    {
        BookingStatus.pending,
        BookingStatus.confirmed,
        BookingStatus.in_progress,
        BookingStatus.completed,
    }
)
TERMINAL_STATUSES = frozenset(
    {BookingStatus.completed, BookingStatus.cancelled, BookingStatus.declined}
)


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_photographer_event_date", "photographer_id", "event_date"),
        CheckConstraint("start_time < end_time", name="ck_booking_time_order"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    photographer_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )
    event_date: Mapped[date] = mapped_column(Date, index=True)
    # zero-padded "HH:MM", same day
    start_time: Mapped[str] = mapped_column(String(5))
    end_time: Mapped[str] = mapped_column(String(5))
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus), default=BookingStatus.pending, index=True
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus), default=PaymentStatus.unpaid
    )

    event_type: Mapped[str] = mapped_column(String(64), default="Wedding")
    event_venue: Mapped[str | None] = mapped_column(String(255))
    location: Mapped[str | None] = mapped_column(String(255))
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    package: Mapped[PackageTier] = mapped_column(Enum(PackageTier), default=PackageTier.gold)
    amount: Mapped[float | None] = mapped_column(Numeric(10, 2))
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    client = relationship("User", foreign_keys=[client_id])
    photographer = relationship("User", foreign_keys=[photographer_id])
