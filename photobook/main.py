import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .api.routes import admin, bookings, payments, photographers
from .config import get_settings
from .db.session import Base, engine
from .workers.scheduler import get_scheduler

logger = logging.getLogger(__name__)

app = FastAPI(title="Photobook Scheduling API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(bookings.router, prefix="/api/v1")
app.include_router(photographers.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")
app.include_router(payments.router, prefix="/api/v1")

_scheduler = None


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage failure", extra={"path": request.url.path}, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage unavailable"},
    )


app.add_exception_handler(SQLAlchemyError, storage_error_handler)


@app.get("/health")
def health():
    return {"status": "ok", "service": "photobook-scheduling"}


@app.on_event("startup")
async def startup_event() -> None:
    global _scheduler
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    Base.metadata.create_all(bind=engine)
    _scheduler = get_scheduler()
    _scheduler.start()


@app.on_event("shutdown")
async def shutdown_event() -> None:
    if _scheduler and _scheduler.running:
        _scheduler.shutdown(wait=False)
