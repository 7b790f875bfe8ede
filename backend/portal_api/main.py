import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portal_api import config
from portal_api.database import init_db
from portal_api.errors import ErrorKind, ServiceError
from portal_api.logging_config import setup_logging
from portal_api.routes import customers, payments, products, sessions, verifications

setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()  # imports every model and creates missing tables
    logger.info("%s started", config.PROJECT_NAME)
    yield


app = FastAPI(title=config.PROJECT_NAME, lifespan=lifespan)

# Credentials cannot be combined with a wildcard origin
_cors_origins = config.CORS_ORIGINS or ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=bool(config.CORS_ORIGINS),
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Error responses
# ============================================================================


def _field_name(loc) -> str:
    # ("body", "email") -> "email"; ("path", "customer_id") -> "customer_id"; ("body",) -> "body"
    parts = [str(p) for p in loc[1:]]
    return ".".join(parts) if parts else str(loc[0])


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [{"field": _field_name(err["loc"]), "message": err["msg"]} for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "kind": ErrorKind.validation_error.value, "errors": errors},
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "kind": exc.kind.value})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    content = {"detail": exc.detail}
    if exc.status_code == 404:
        content["kind"] = ErrorKind.record_not_found.value
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "kind": ErrorKind.unexpected_error.value},
    )


# ============================================================================
# Routers
# ============================================================================

app.include_router(customers.router, prefix="/api/customers", tags=["customers"])
app.include_router(products.router, prefix="/api/products", tags=["products"])
app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])
app.include_router(payments.router, prefix="/api/payments", tags=["payments"])
app.include_router(verifications.router, prefix="/api/verifications", tags=["verifications"])

# Older clients call products "services"
app.include_router(products.router, prefix="/api/services", tags=["products"], include_in_schema=False)


@app.get("/api/health")
def health_check():
    """Liveness check"""
    return {"status": "ok"}
