"""
GSD - plan / work / done task manager
"""
import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from gsd.api.v1 import api_router
from gsd.config import settings
from gsd.core.color_pool import color_pool, scan_used_colors
from gsd.database import Base, SessionLocal, engine
from gsd.jobs.retention import shutdown_scheduler, start_scheduler
from gsd.logging_config import configure_logging
from gsd.schemas import ErrorResponse, FieldError

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

ERROR_NAMES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        scan_used_colors(db, color_pool)
    finally:
        db.close()
    start_scheduler()
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield
    shutdown_scheduler()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.state.request_id = request_id
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "%s %s %d %.1fms [%s]",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        request_id,
    )
    return response


def error_response(
    request: Request,
    status_code: int,
    message: str,
    errors: Optional[List[FieldError]] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    body = ErrorResponse(
        status_code=status_code,
        message=message,
        error=ERROR_NAMES.get(status_code, "Error"),
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=request.url.path,
        request_id=getattr(request.state, "request_id", None),
        errors=errors,
    )
    if status_code >= 500:
        logger.error("%s %s -> %d: %s", request.method, request.url.path, status_code, message)
    else:
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, status_code, message)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return error_response(
        request, exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        FieldError(
            field=".".join(str(part) for part in error["loc"] if part != "body"),
            constraints=[error["msg"]],
        )
        for error in exc.errors()
    ]
    return error_response(request, status.HTTP_400_BAD_REQUEST, "Validation failed", errors=errors)


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error: %s", exc.orig)
    return error_response(request, status.HTTP_409_CONFLICT, "Resource conflicts with existing data")


@app.exception_handler(OperationalError)
async def operational_exception_handler(request: Request, exc: OperationalError):
    logger.error("Database unavailable", exc_info=exc)
    return error_response(request, status.HTTP_503_SERVICE_UNAVAILABLE, "Database unavailable")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


app.include_router(api_router)


@app.get("/")
def root():
    return {"name": settings.APP_NAME, "version": settings.APP_VERSION}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("gsd.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
