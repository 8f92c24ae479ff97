import math
import re
from typing import Any, Mapping, Optional

from app.api.schemas.reviews import INT64_MAX, INT64_MIN, ReviewSubmission
from app.errors import ValidationError

RATING_MIN = 1
RATING_MAX = 5

_DECIMAL_INT = re.compile(r"^[+-]?\d+$")


class InvalidProductId(ValueError):
    pass


def _first_present(data: Mapping[str, Any], primary: str, alias: str) -> Any:
    """
    Value of `primary`, or of `alias` only when `primary` is absent or null.
    A present-but-empty primary value wins over the alias.
    """
    value = data.get(primary)
    if value is None:
        value = data.get(alias)
    return value


def is_missing_identifier(value: Any) -> bool:
    """
    Identifier presence rule: absent, null, False, blank text and
    zero-equivalent values ("0", 0, "-0", "000") all count as not provided.
    A product identified as 0 therefore cannot be addressed.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and value == 0:
        return True
    text = str(value).strip()
    if not text:
        return True
    return bool(_DECIMAL_INT.match(text)) and int(text) == 0


def parse_product_id(value: Any) -> int:
    """
    Parse a product id as a signed 64-bit decimal integer. Raises InvalidProductId.
    Integral floats (e.g. 42.0 from a JSON body) are accepted.
    """
    if isinstance(value, bool):
        raise InvalidProductId(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidProductId(value)
        value = int(value)
    text = str(value).strip()
    if not _DECIMAL_INT.match(text):
        raise InvalidProductId(value)
    pid = int(text)
    if pid < INT64_MIN or pid > INT64_MAX:
        raise InvalidProductId(value)
    return pid


def parse_rating(value: Any) -> Optional[int]:
    """Return the rating as an int when it is a finite whole number in [1, 5], else None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    if number < RATING_MIN or number > RATING_MAX:
        return None
    return int(number)


def _optional_text(value: Any) -> Optional[str]:
    return str(value) if value not in (None, "") else None


def validate_submission(data: Mapping[str, Any]) -> ReviewSubmission:
    """
    Check and coerce a normalized request body into a ReviewSubmission.
    Rules run in order and the first failure raises ValidationError:
      1. productId | product_id present and a 64-bit integer
      2. rating a whole number between 1 and 5
      3. body | review and author_name present
    title, author_email and product_handle are optional. Any `status` is ignored.
    """
    product_id_raw = _first_present(data, "productId", "product_id")
    if is_missing_identifier(product_id_raw):
        raise ValidationError("product_id is required")
    try:
        product_id = parse_product_id(product_id_raw)
    except InvalidProductId:
        raise ValidationError("Invalid product_id")

    rating = parse_rating(data.get("rating"))
    if rating is None:
        raise ValidationError(f"rating must be between {RATING_MIN} and {RATING_MAX}")

    text = _first_present(data, "body", "review")
    text = "" if text is None else str(text)
    author_name = _optional_text(data.get("author_name")) or ""
    if not author_name or not text:
        raise ValidationError("author_name and body are required")

    return ReviewSubmission(
        product_id=product_id,
        rating=rating,
        body=text,
        author_name=author_name,
        title=_optional_text(data.get("title")),
        author_email=_optional_text(data.get("author_email")),
        product_handle=_optional_text(data.get("product_handle")),
    )
