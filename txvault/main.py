"""Transaction Vault - Main Application."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from txvault.api.tx import router as tx_router
from txvault.domain.envelope.errors import ConfigError
from txvault.domain.envelope.master_key import get_master_key_handle
from txvault.logging_hardening import setup_logging
from txvault.routers import health
from txvault.settings import settings

logger = logging.getLogger(__name__)

# Initialize logging (with redaction filters) early
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.STORE_BACKEND.lower() == "postgres" and settings.DEV_MODE:
        from txvault.adapters.postgres.session import init_db
        init_db()
        logger.info("DEV_MODE: database tables ensured.")

    try:
        get_master_key_handle().get()
    except ConfigError as e:
        # Requests that need the key will fail with CONFIG_ERROR; /health reports it.
        logger.error(f"Master key not available at startup: {e}")

    yield
    # Shutdown
    logger.info("Shutdown complete.")


app = FastAPI(
    title="Transaction Vault",
    description="AES-256-GCM envelope encryption for transaction payloads",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def vault_http_exception_handler(request: Request, exc: HTTPException):
    # Errors raised via raise_vault_error already carry a top-level 'error' key
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
            headers=exc.headers
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": {"code": "INVALID_REQUEST", "message": "Malformed request body"}},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


# Mount routers
app.include_router(tx_router.router, prefix="/tx", tags=["Transactions"])
app.include_router(health.router, tags=["Health"])
