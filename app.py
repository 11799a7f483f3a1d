import io
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, FastAPI, Depends, Request, Response, Query
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sqlalchemy import text

import qrcode

from config import config
from database import create_db_engine, make_session_factory, init_db
from errors import TraceLedgerError
from logging_config import configure_logging
from schemas import (
    CollectionEventSubmission,
    CollectionEventOut,
    ErrorResponse,
    EventResponse,
    EventListResponse,
    Stats,
    StatsResponse,
)
from store import CollectionEventStore, EventFilter
from utils import pagination
from validation import validate
from verification import Verifier, VerificationStub

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/collection-events", tags=["collection-events"])


def get_store(request: Request) -> CollectionEventStore:
    return request.app.state.store


# ---------- APIs: collection events ----------
@router.post("", response_model=EventResponse, status_code=201)
async def submit_harvest(body: CollectionEventSubmission, store: CollectionEventStore = Depends(get_store)):
    sub = validate(body.model_dump())
    ev = await store.create(sub)
    return EventResponse(message="Harvest submitted successfully", data=CollectionEventOut.from_model(ev))


# declared before /{batch_id} so "stats" is not taken for a batch id
@router.get("/stats", response_model=StatsResponse)
def collection_stats(store: CollectionEventStore = Depends(get_store)):
    return StatsResponse(message="Statistics retrieved successfully", data=Stats(**store.stats()))


@router.get("", response_model=EventListResponse)
def list_collection_events(
    page: int = Query(1, ge=1),
    pageSize: Optional[int] = Query(None, ge=1, le=config.MAX_PAGE_SIZE),
    limit: Optional[int] = Query(None, ge=1, le=config.MAX_PAGE_SIZE, description="alias of pageSize"),
    farmerName: Optional[str] = Query(None, description="case-insensitive substring"),
    herbName: Optional[str] = Query(None, description="case-insensitive substring"),
    state: Optional[str] = Query(None, description="case-insensitive substring of geoVerification.state"),
    store: CollectionEventStore = Depends(get_store),
):
    page_size = pageSize or limit or config.DEFAULT_PAGE_SIZE
    result = store.list(EventFilter(farmer_name=farmerName, herb_name=herbName, state=state), page, page_size)
    return EventListResponse(
        message="Collection events retrieved successfully",
        data=[CollectionEventOut.from_model(ev) for ev in result.items],
        pagination=pagination(page, page_size, result.total_count),
    )


@router.get("/{batch_id}", response_model=EventResponse)
def get_collection_event(batch_id: str, store: CollectionEventStore = Depends(get_store)):
    ev = store.get_by_batch_id(batch_id)
    return EventResponse(message="Collection event retrieved successfully", data=CollectionEventOut.from_model(ev))


@router.get("/{batch_id}/qrcode")
def collection_event_qrcode(batch_id: str, request: Request, store: CollectionEventStore = Depends(get_store)):
    store.get_by_batch_id(batch_id)
    url = f"{request.app.state.base_url}/trace?batchId={batch_id}"
    img = qrcode.make(url)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return Response(content=buf.getvalue(), media_type="image/png")


# ---------- Error handlers ----------
def _error(status_code: int, message: str, errors=None) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def ledger_error_handler(request: Request, exc: TraceLedgerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error(exc.status_code, exc.message, exc.errors)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()]
    return _error(400, "Validation error", errors)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


# ---------- App ----------
def create_app(
    database_url: Optional[str] = None,
    verifier: Optional[Verifier] = None,
    base_url: Optional[str] = None,
) -> FastAPI:
    config.validate()
    engine = create_db_engine(database_url or config.DATABASE_URL)

    app = FastAPI(title="Herb Trace Ledger", version="0.1.0")
    app.state.base_url = base_url or config.BASE_URL
    app.state.store = CollectionEventStore(
        make_session_factory(engine),
        verifier or VerificationStub(delay=config.VERIFICATION_DELAY_SECONDS),
        verification_timeout=config.VERIFICATION_TIMEOUT_SECONDS,
        max_attempts=config.BATCH_ID_MAX_ATTEMPTS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TraceLedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.on_event("startup")
    def on_startup():
        init_db(engine)
        logger.info("database ready at %s", engine.url.render_as_string(hide_password=True))

    @app.on_event("shutdown")
    def on_shutdown():
        engine.dispose()

    @app.get("/health")
    def health():
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            db_status = "Connected"
        except Exception:
            logger.exception("health check could not reach the database")
            db_status = "Disconnected"
        return {
            "success": True,
            "message": "Herb traceability API is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": config.ENVIRONMENT,
            "database_status": db_status,
        }

    @app.get("/api")
    def api_info():
        return {
            "success": True,
            "message": "Herb Traceability API",
            "version": app.version,
            "endpoints": {
                "POST /api/collection-events": "Submit a new harvest",
                "GET /api/collection-events": "List collection events (pagination and filters)",
                "GET /api/collection-events/stats": "Collection event statistics",
                "GET /api/collection-events/{batchId}": "Collection event by batch ID",
                "GET /api/collection-events/{batchId}/qrcode": "QR code for the consumer trace page",
                "GET /health": "Health check",
            },
        }

    app.include_router(router)
    return app


configure_logging(config.LOG_LEVEL, json_format=config.LOG_JSON)
app = create_app()
