from datetime import date, datetime
from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base


class DayAvailability(Base):
    """A photographer's open/closed flag for a single calendar day.

    Days without a row are open.
    """

    __tablename__ = "photographer_availability"
    __table_args__ = (
        UniqueConstraint("photographer_id", "event_date", name="uq_availability_photographer_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    photographer_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    event_date: Mapped[date] = mapped_column(Date)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
