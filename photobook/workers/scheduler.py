import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from ..config import get_settings
from ..db.session import SessionLocal
from ..services import conflict_report

logger = logging.getLogger(__name__)


def scan_conflicts() -> int:
    with SessionLocal() as db:
        conflicts = conflict_report.list_conflicts(db)
    overlapping = [record for record in conflicts if record.overlaps]
    if overlapping:
        logger.warning(
            "Overlapping bookings detected",
            extra={"conflicts": len(conflicts), "overlapping": len(overlapping)},
        )
    for record in overlapping:
        logger.info(
            "Overlapping bookings",
            extra={
                "photographer_id": record.photographer_id,
                "event_date": record.event_date.isoformat(),
                "booking_a": record.booking_a.id,
                "booking_b": record.booking_b.id,
            },
        )
    return len(overlapping)


def get_scheduler() -> AsyncIOScheduler:
    settings = get_settings()
    scheduler = AsyncIOScheduler()
    scheduler.add_job(scan_conflicts, "interval", minutes=settings.conflict_scan_interval_min)
    return scheduler
