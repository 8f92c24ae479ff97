# tests/conftest.py
import os
import sys

import pytest
from fastapi.testclient import TestClient

# ensure project root is importable
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app.main import app  # noqa: E402
from app.api.deps import get_review_store  # noqa: E402
from app.database import FileBackedDB  # noqa: E402
from app.services.reviews import REVIEWS_TABLE, ReviewStore  # noqa: E402

SHOP = "reviews-app-dev-3.myshopify.com"


class RecordingStore:
    """
    Fake review store. Records every call so tests can assert that a rejected
    request never reached persistence. Optionally fails every call.
    """

    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def list_reviews(self, shop, product_id, status=None):
        self.calls.append(("list", shop, product_id, status))
        if self.fail:
            raise RuntimeError("connection refused: store at 10.0.0.5")
        return []

    def create_review(self, shop, submission):
        self.calls.append(("create", shop, submission))
        if self.fail:
            raise RuntimeError("connection refused: store at 10.0.0.5")
        raise AssertionError("RecordingStore.create_review should only be used with fail=True")


@pytest.fixture
def file_db(tmp_path):
    """File-backed DB isolated in a per-test temp data directory."""
    return FileBackedDB(tmp_path, tables={REVIEWS_TABLE: "reviews.csv"})


@pytest.fixture
def store(file_db):
    return ReviewStore(file_db)


@pytest.fixture
def client(store):
    """
    TestClient wired to a temp-dir backed review store.
    Usage: resp = client.get("/api/proxy/reviews?product_id=1", headers=shop_headers)
    """
    app.dependency_overrides[get_review_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_review_store, None)


@pytest.fixture
def fake_store_client():
    """
    Returns a callable that installs a RecordingStore and yields (client, store).
    Usage: client, fake = fake_store_client(fail=True)
    """
    def _fn(fail: bool = False):
        fake = RecordingStore(fail=fail)
        app.dependency_overrides[get_review_store] = lambda: fake
        return TestClient(app), fake

    try:
        yield _fn
    finally:
        app.dependency_overrides.pop(get_review_store, None)


@pytest.fixture
def shop_headers():
    return {"X-Shopify-Shop-Domain": SHOP}
