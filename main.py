import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from database import check_connection, get_session, get_session_context, init_db
from dependencies import verify_token
from models import utc_now
from routers import (
    admin_router,
    auth_router,
    institutions_router,
    ledger_router,
    payments_router,
    records_router,
    students_router,
)
from seed import seed_demo_data
from services import InstitutionService, LedgerStore, PaymentService, RecordStore, StudentService

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("blockedu")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Alembic owns the schema in production; create_all is a no-op on existing tables
    init_db()
    if config.SEED_DEMO_DATA:
        with get_session_context() as db:
            seed_demo_data(db)
    logger.info("BlockEdu API ready (hash=%s, canonicalization=%s, unanchored=%s)",
                config.HASH_ALGORITHM, config.CANONICALIZATION_VERSION, config.UNANCHORED_POLICY)
    yield


# App instance
app = FastAPI(title="BlockEdu API", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(institutions_router)
app.include_router(students_router)
app.include_router(records_router)
app.include_router(ledger_router)
app.include_router(payments_router)
app.include_router(admin_router)


@app.get("/api/dashboard/stats")
def dashboard_stats(db: Session = Depends(get_session), token: dict = Depends(verify_token)):
    ledger = LedgerStore(db)
    return {
        "total_students": StudentService.count(db),
        "total_records": RecordStore(db).count(),
        "total_transactions": ledger.count(),
        "total_institutions": InstitutionService.count(db),
        "payments": PaymentService.revenue_summary(db),
        "recent_transactions": [
            {
                "transaction_id": tx.transaction_id[:20] + "...",
                "action": tx.action.value,
                "timestamp": tx.timestamp,
            }
            for tx in ledger.list_entries(limit=5, newest_first=True)
        ],
    }


@app.get("/api/health")
def health():
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "services": {
            "database": "connected" if check_connection() else "unavailable",
            "blockchain": "simulated",
        },
    }


# 404 Fallback: unknown routes only; handlers' own 404s keep their detail
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# 500 Fallback Middleware
@app.middleware("http")
async def error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT, reload=True)
