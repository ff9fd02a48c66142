"""
KYC Service - Main Application
==============================

FastAPI application for wallet identity verification and attestation
issuance.

Version: 0.1.0
"""

import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kyc_common.config import settings
from kyc_common.logging import bind_context, clear_context, get_logger, setup_logging
from kyc_common.models import ErrorResponse, HealthResponse
from services.kyc.errors import AlreadyRegisteredError, KycError, VerificationUnavailableError
from services.kyc.orchestrator import get_orchestrator
from services.kyc.routes import admin, verification


# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="kyc",
)

logger = get_logger(__name__)

RETRY_AFTER_SECONDS = 5


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "kyc_service_starting",
        environment=settings.environment.value,
        port=settings.port,
        provider_mode=settings.provider.mode.value,
    )

    try:
        orchestrator = get_orchestrator()
    except Exception as e:
        logger.error("startup_failed", error=str(e))
        raise

    yield

    logger.info("kyc_service_shutting_down")
    await orchestrator.provider.close()


app = FastAPI(
    title="KYC Attestation Service",
    description="Wallet identity verification with attestation issuance",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next: Any) -> Any:
    """Bind a request ID to every log line of the request."""
    clear_context()
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    bind_context(request_id=request_id, path=request.url.path)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """
    Service health check.

    Returns health status of the service, its stores and its provider.
    """
    orchestrator = get_orchestrator()

    components: dict[str, dict[str, Any]] = {
        "subjects": await orchestrator.registry.store.health_check(),
        "verification_records": await orchestrator.ledger.store.health_check(),
        "provider": await orchestrator.provider.health_check(),
    }

    response = HealthResponse(service="kyc", version="0.1.0", components=components)
    if not response.is_healthy:
        response.status = "degraded"

    return response


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "KYC Attestation Service",
        "version": "0.1.0",
        "docs": "/docs",
    }


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(
    verification.router,
    prefix="/api/v1/kyc",
    tags=["KYC"],
)

app.include_router(
    admin.router,
    prefix="/api/v1/admin",
    tags=["Admin"],
)


# ============================================================================
# Error Handlers
# ============================================================================


def _error_response(
    status_code: int,
    error: str,
    error_code: str | None = None,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        error_code=error_code,
        status_code=status_code,
        details=details,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


@app.exception_handler(AlreadyRegisteredError)
async def already_registered_handler(request: Request, exc: AlreadyRegisteredError) -> JSONResponse:
    """Registration conflicts."""
    logger.warning("already_registered", identifier=exc.identifier, path=request.url.path)
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        error_code=exc.code,
    )


@app.exception_handler(VerificationUnavailableError)
async def verification_unavailable_handler(
    request: Request, exc: VerificationUnavailableError
) -> JSONResponse:
    """The registry could not be reached; the client may retry."""
    logger.warning(
        "verification_unavailable_response",
        provider=exc.provider,
        reason=exc.reason,
        path=request.url.path,
    )
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Verification provider unavailable, retry later",
        error_code=exc.code,
        details={"retryable": exc.retryable, "provider": exc.provider},
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


@app.exception_handler(KycError)
async def kyc_error_handler(request: Request, exc: KycError) -> JSONResponse:
    logger.error("kyc_error", error=str(exc), error_code=exc.code, path=request.url.path)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        error_code=exc.code,
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
    )


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.kyc.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
