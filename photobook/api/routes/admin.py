from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...api import deps
from ...core.auth import Actor
from ...db.session import get_db
from ...db import schemas
from ...services import conflict_report

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/conflicts", response_model=list[schemas.ConflictRecord])
def list_conflicts(
    db: Session = Depends(get_db),
    _: Actor = Depends(deps.require_roles("admin")),
):
    return conflict_report.list_conflicts(db)
