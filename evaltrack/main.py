# evaltrack/main.py
import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from pymongo.errors import PyMongoError
from slowapi.errors import RateLimitExceeded

from evaltrack.core.config import settings
from evaltrack.core.db import get_db, close_db
from evaltrack.core.errors import (
    AppError, handle_app_error, handle_pymongo_error, handle_request_validation_error,
)
from evaltrack.core.indexes import ensure_core_indexes, migrate_requests_schema
from evaltrack.core.rate_limit import limiter, rate_limit_handler
from evaltrack.api.router import api_router
from evaltrack.services import reference_service

# ---- Logging ----
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

APP_NAME = os.getenv("APP_NAME", "Evaluation Request Tracker")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")

# --- CORS: .env + defaults de desarrollo ---
defaults = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    # front en producción
    "https://frontend-isd2.vercel.app",
}
CORS_ORIGINS = sorted(set((settings.cors_origins or []) + list(defaults)))

app = FastAPI(title=APP_NAME, version=APP_VERSION)

# --- IMPORTANTE: CORS primero ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(GZipMiddleware, minimum_size=1024)

# SlowAPI
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

# Errores de dominio y de almacenamiento
app.add_exception_handler(AppError, handle_app_error)
app.add_exception_handler(RequestValidationError, handle_request_validation_error)
app.add_exception_handler(PyMongoError, handle_pymongo_error)

app.include_router(api_router)


@app.get("/health")
async def health():
    return {"ok": True}


# Índices, migraciones y contador en startup (idempotente)
@app.on_event("startup")
async def startup():
    db = get_db()
    await ensure_core_indexes(db)
    await migrate_requests_schema(db)
    await reference_service.initialize()
    logger.info("startup: %s %s listo (db=%s)", APP_NAME, APP_VERSION, settings.db_name)


@app.on_event("shutdown")
async def shutdown_db_client():
    await close_db()


# Runner local opcional
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("evaltrack.main:app", reload=True, host="0.0.0.0", port=int(os.getenv("PORT", 5000)))
