"""
Main FastAPI application entry point.
"""
import logging
import multiprocessing
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from checkout_buddy.core.config import settings
from checkout_buddy.core.exceptions import AppError
from checkout_buddy.core.responses import (
    app_error_handler,
    error_response,
    http_exception_handler,
    request_validation_handler,
)
from checkout_buddy.helpers.migrations import apply_migrations
from checkout_buddy.routers import auth, health, orders, payments, receipts, scanned, users

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up...")
    if settings.RUN_MIGRATIONS:
        logger.info("Run alembic upgrade head...")
        # Alembic's env runs its own event loop, so it gets its own process
        process = multiprocessing.Process(target=apply_migrations)
        process.start()
        process.join()
        if process.exitcode != 0:
            logger.error(f"Alembic upgrade exited with code {process.exitcode}")
        else:
            logger.info("Finished alembic upgrade.")
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for barcode scanning, price comparison, orders and receipts",
    version=settings.VERSION,
    openapi_url="/openapi.json",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response("Internal server error", 500)


app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# Include routers
app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])
app.include_router(users.router, prefix=f"{settings.API_PREFIX}/users", tags=["Users"])
app.include_router(orders.router, prefix=f"{settings.API_PREFIX}/orders", tags=["Orders"])
app.include_router(payments.router, prefix=f"{settings.API_PREFIX}/payments", tags=["Payments"])
app.include_router(receipts.router, prefix=f"{settings.API_PREFIX}/receipt", tags=["Receipts"])
app.include_router(scanned.router, prefix=f"{settings.API_PREFIX}/scanned", tags=["Scanned"])
app.include_router(health.router, prefix="/health", tags=["HealthCheck"])
