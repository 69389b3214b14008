# app/main.py

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.api.middleware import CorrelationIdMiddleware, RequestLoggingMiddleware
from app.api.routers import audit, health
from app.config.logging import configure_logging
from app.config.settings import get_settings
from app.application.exceptions import ApplicationError, AuditQueryError
from app.domain.exceptions import DomainError, DomainValidationError
from app.security.exceptions import AuthenticationError, AuthorizationError

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> RequestLogging.
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(DomainValidationError)
async def domain_validation_error_handler(request, exc: DomainValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(AuditQueryError)
async def audit_query_error_handler(request, exc: AuditQueryError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /audit
app.include_router(health.router)
app.include_router(audit.router, prefix="/audit", tags=["audit"])
