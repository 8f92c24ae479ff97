import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from app.api.body import read_body
from app.api.deps import get_review_store, require_shop
from app.api.responses import ok
from app.config import settings
from app.errors import InternalError, MethodError, ValidationError
from app.services.review_validation import InvalidProductId, is_missing_identifier, parse_product_id, validate_submission
from app.services.reviews import ReviewStore

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix=settings.PROXY_PREFIX, tags=["reviews"])

REVIEWS_PATH = f"{settings.PROXY_PREFIX}/reviews"


@router.get("/reviews")
def list_reviews(
    product_id: Optional[str] = Query(None),
    product_id_alias: Optional[str] = Query(None, alias="productId"),
    status: Optional[str] = Query(None, description="pending | approved | rejected (default approved)"),
    shop: str = Depends(require_shop),
    store: ReviewStore = Depends(get_review_store),
):
    """
    List up to 50 reviews of a product for the resolved shop, newest first.
    An unknown `status` silently means `approved`.
    """
    raw = product_id if product_id is not None else product_id_alias
    if is_missing_identifier(raw):
        raise ValidationError("Missing product_id")
    try:
        pid = parse_product_id(raw)
    except InvalidProductId:
        raise ValidationError("Invalid product_id")

    try:
        reviews = store.list_reviews(shop, pid, status)
    except Exception as exc:
        logger.exception("GET /reviews error")
        raise InternalError("Failed to load reviews") from exc
    return ok(reviews=reviews)


@router.post("/reviews")
async def submit_review(
    request: Request,
    shop: str = Depends(require_shop),
    store: ReviewStore = Depends(get_review_store),
):
    """
    Submit a review (JSON or form body). The review is always stored as `pending`.
    Body: product_id | productId, rating (1-5), body | review, author_name,
    and optional title, author_email, product_handle.
    """
    data = await read_body(request)
    submission = validate_submission(data)

    try:
        created = await run_in_threadpool(store.create_review, shop, submission)
    except Exception as exc:
        logger.exception("POST /reviews error")
        raise InternalError("Failed to submit review") from exc
    return ok(review=created)


@router.api_route("/reviews", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
def reviews_method_not_allowed():
    raise MethodError("Method not allowed")


@router.api_route("", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
@router.api_route("/", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def proxy_root(request: Request):
    # 307 keeps the method and body of a POST
    return RedirectResponse(str(request.url.replace(path=REVIEWS_PATH)), status_code=307)
