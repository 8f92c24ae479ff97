# app/models/review.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime


class ReviewStatus(str, Enum):
    """
    Moderation state of a review. Reviews are always created `pending`;
    only an external moderation process moves them to approved / rejected.
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, name: Optional[str], default: Optional["ReviewStatus"] = None) -> "ReviewStatus":
        """
        Map a status name onto a member by exact value match.
        Unknown, empty or missing names select `default` (approved unless given).
        """
        if default is None:
            default = cls.APPROVED
        for member in cls:
            if member.value == name:
                return member
        return default


# column order of the reviews table
REVIEW_COLUMNS = [
    "id", "shopDomain", "productId", "productHandle", "rating", "title",
    "body", "authorName", "authorEmail", "status", "createdAt",
]


@dataclass
class Review:
    """
    A stored product review. The table keeps every value as text, so
    from_dict converts back to proper types (productId stays an exact int).
    """
    id: str
    shop_domain: str
    product_id: int
    rating: int
    body: str
    author_name: str
    status: ReviewStatus = ReviewStatus.PENDING
    product_handle: Optional[str] = None
    title: Optional[str] = None
    author_email: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Review":
        if d is None:
            raise ValueError("Cannot construct Review from None")

        created_at_raw = d.get("createdAt")
        created_at = None
        if isinstance(created_at_raw, datetime):
            created_at = created_at_raw
        elif created_at_raw:
            created_at = datetime.fromisoformat(str(created_at_raw))

        return cls(
            id=str(d.get("id")),
            shop_domain=str(d.get("shopDomain") or ""),
            product_id=int(d.get("productId")),
            rating=int(float(d.get("rating"))),
            body=str(d.get("body") or ""),
            author_name=str(d.get("authorName") or ""),
            status=ReviewStatus(d.get("status") or ReviewStatus.PENDING.value),
            product_handle=d.get("productHandle") or None,
            title=d.get("title") or None,
            author_email=d.get("authorEmail") or None,
            created_at=created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Public (camelCase) representation; productId is left as an int for the encoder."""
        return {
            "id": self.id,
            "shopDomain": self.shop_domain,
            "productId": self.product_id,
            "productHandle": self.product_handle,
            "rating": self.rating,
            "title": self.title,
            "body": self.body,
            "authorName": self.author_name,
            "authorEmail": self.author_email,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(timespec="microseconds") if self.created_at else None,
        }
