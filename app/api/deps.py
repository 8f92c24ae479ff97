# app/api/deps.py
from functools import lru_cache
from typing import Mapping, Optional

from fastapi import Depends, Request

from app.config import Settings, get_settings
from app.database import FileBackedDB
from app.errors import AuthorizationError
from app.services.reviews import REVIEWS_TABLE, ReviewStore

MISSING_SHOP_MESSAGE = (
    "Missing shop. Ensure you call via the App Proxy (/apps/<subpath>) or add ?shop=<domain>."
)


@lru_cache()
def get_db() -> FileBackedDB:
    """
    Dependency that returns the file-backed DB for the configured data dir.
    Usage:
        db = Depends(get_db)
    """
    settings = get_settings()
    return FileBackedDB(settings.DATA_DIR, tables={REVIEWS_TABLE: settings.REVIEWS_FILE})


def get_review_store(
    db: FileBackedDB = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ReviewStore:
    """
    Dependency that builds the review store gateway.
    Tests swap it via app.dependency_overrides[get_review_store].
    """
    return ReviewStore(db, page_size=settings.REVIEWS_PAGE_SIZE)


def resolve_shop(
    headers: Mapping[str, str],
    query: Mapping[str, str],
    shop_header: str = "x-shopify-shop-domain",
    host_suffix: str = ".myshopify.com",
) -> Optional[str]:
    """
    Resolve the shop domain for a request, first match wins:
      1. the dedicated shop header
      2. the `shop` query parameter
      3. x-forwarded-host, else host, only if it ends with host_suffix
    Returns None when nothing matches.
    """
    hdr = headers.get(shop_header)
    if hdr:
        return hdr

    q = query.get("shop")
    if q:
        return q

    host = headers.get("x-forwarded-host") or headers.get("host")
    if host and host.lower().endswith(host_suffix.lower()):
        return host

    return None


def require_shop(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """Resolve the shop or fail the request with 401 before any store call."""
    shop = resolve_shop(
        request.headers,
        request.query_params,
        shop_header=settings.SHOP_HEADER,
        host_suffix=settings.SHOP_HOST_SUFFIX,
    )
    if not shop:
        raise AuthorizationError(MISSING_SHOP_MESSAGE)
    return shop
