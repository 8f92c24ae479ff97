from datetime import datetime, timezone
from typing import List, Optional

from app.api.schemas.reviews import ReviewSubmission
from app.database import FileBackedDB
from app.models.review import Review, ReviewStatus

REVIEWS_TABLE = "reviews"
DEFAULT_PAGE_SIZE = 50


class ReviewStore:
    """
    The only component that touches persistence. Every read is filtered by
    shop and every write is stamped with it, so a request can never reach
    another tenant's reviews.
    """

    def __init__(self, db: FileBackedDB, page_size: int = DEFAULT_PAGE_SIZE):
        self.db = db
        self.page_size = page_size

    def list_reviews(self, shop: str, product_id: int, status: Optional[str] = None) -> List[Review]:
        """
        Newest-first reviews of one product in one moderation state, capped at page_size.
        Unknown or missing status names fall back to `approved`.
        """
        effective = ReviewStatus.parse(status)
        rows = self.db.find_records(
            REVIEWS_TABLE,
            where={"shopDomain": shop, "productId": str(product_id), "status": effective.value},
            order_by="createdAt",
            descending=True,
            limit=self.page_size,
        )
        return [Review.from_dict(r) for r in rows]

    def create_review(self, shop: str, submission: ReviewSubmission) -> Review:
        review = Review(
            id="",
            shop_domain=shop,
            product_id=submission.product_id,
            rating=submission.rating,
            body=submission.body,
            author_name=submission.author_name,
            status=ReviewStatus.PENDING,
            product_handle=submission.product_handle,
            title=submission.title,
            author_email=submission.author_email,
            created_at=datetime.now(timezone.utc),
        )
        saved = self.db.create_record(REVIEWS_TABLE, review.to_dict(), id_field="id")
        return Review.from_dict(saved)
