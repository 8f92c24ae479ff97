from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, conint, constr

# signed 64-bit range of the productId column
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class ReviewSubmission(BaseModel):
    """
    A validated review submission. There is deliberately no `status` field:
    callers can never choose the moderation state of a new review.
    """
    product_id: conint(ge=INT64_MIN, le=INT64_MAX, strict=True)
    rating: conint(ge=1, le=5, strict=True) = Field(..., description="Rating between 1 and 5")
    body: constr(min_length=1)
    author_name: constr(min_length=1)
    title: Optional[str] = None
    author_email: Optional[str] = None
    product_handle: Optional[str] = None

    model_config = ConfigDict(extra="ignore", frozen=True)
