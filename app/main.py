# app/main.py
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from contextlib import asynccontextmanager

from app.config import settings
from app.api.deps import get_db
from app.api.responses import error
from app.api.routes import reviews as reviews_routes
from app.errors import ReviewsAPIError
from app.middleware.cors_config import configure_cors
from app.middleware.security_headers import add_security_headers
from app.services.reviews import REVIEWS_TABLE


logger = logging.getLogger("uvicorn.error")
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context: run startup checks before the app starts serving,
    and allow for clean shutdown actions if needed later.
    """
    # --- startup logic ---
    logger.setLevel(settings.LOG_LEVEL.upper())

    # A missing reviews table is fine (first create writes it) but worth a hint.
    db = get_db()
    if not db.table_exists(REVIEWS_TABLE):
        logger.warning(
            "Reviews file not found in %s — it will be created on the first submission (or run scripts/init_db.py).",
            db.data_dir,
        )
    else:
        logger.info("Using reviews file in %s", db.data_dir)

    yield
    # --- shutdown logic (if needed) ---
    logger.info("Shutting down Storefront Reviews API")
app = FastAPI(title="Storefront Reviews API", version="0.1.0", lifespan=lifespan)
configure_cors(app)
add_security_headers(app)


@app.exception_handler(ReviewsAPIError)
async def reviews_error_handler(request: Request, exc: ReviewsAPIError):
    return error(exc.message, exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # routing errors (unknown path, unsupported verb) keep the envelope too
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    response = error(message, exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # never leak internals to the storefront
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error("Internal server error", 500)


app.include_router(reviews_routes.router)


@app.get("/", tags=["root"])
async def root():
    return {"status": "ok", "service": "Storefront Reviews API"}
