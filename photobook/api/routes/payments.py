from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...api import deps
from ...core.errors import SchedulingError
from ...db.session import get_db
from ...db import schemas
from ...services import booking_service

router = APIRouter(prefix="/payments", tags=["payments"])

SUCCESS_STATUSES = {"succeeded", "success", "paid", "captured"}


@router.post("/webhook", dependencies=[Depends(deps.verify_webhook_secret)])
def payments_webhook(payload: schemas.PaymentWebhook, db: Session = Depends(get_db)):
    if payload.status not in SUCCESS_STATUSES:
        return {"status": "ignored"}
    try:
        booking = booking_service.mark_paid(db, payload.booking_id, confirm=payload.confirm)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc
    return {"status": "ok", "booking_status": booking.status.value}
