import asyncio
import logging
import math
from typing import Any, Callable, Dict, Optional

from errors import UpstreamError, ValidationError
from request_utils import is_truthy, to_number, to_text
from schemas import FeedbackRecord, FeedbackResponse

logger = logging.getLogger("puzzle-api")

MIN_RATING = 1
MAX_RATING = 5
MIN_COMMENT_LENGTH = 3
MAX_COMMENT_LENGTH = 2000

FeedbackWriter = Callable[[Dict[str, Any]], Any]


def _utf16_length(text: str) -> int:
    # Counted in UTF-16 code units, the way the page counts them.
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def _clean(value: Any) -> str:
    return to_text(value).strip() if is_truthy(value) else ""


def _parse_rating(value: Any) -> int:
    rating = to_number(value) if value is not None else math.nan
    if not math.isfinite(rating) or not rating.is_integer():
        raise ValidationError("Rating must be 1–5")
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationError("Rating must be 1–5")
    return int(rating)


def normalize_feedback(
    data: Dict[str, Any],
    user_agent: Optional[str] = None,
    ip: Optional[str] = None,
) -> FeedbackRecord:
    rating = _parse_rating(data.get("rating"))

    comment = _clean(data.get("comment"))
    length = _utf16_length(comment)
    if length < MIN_COMMENT_LENGTH:
        raise ValidationError("Comment is required")
    if length > MAX_COMMENT_LENGTH:
        raise ValidationError("Comment too long")

    return FeedbackRecord(
        puzzle_code=_clean(data.get("code")).upper() or None,
        rating=rating,
        comment=comment,
        contact=_clean(data.get("contact")) or None,
        user_agent=user_agent or None,
        ip=ip or None,
    )


async def record_feedback(
    data: Any,
    *,
    user_agent: Optional[str],
    ip: Optional[str],
    writer: FeedbackWriter,
) -> FeedbackResponse:
    if not isinstance(data, dict):
        data = {}

    record = normalize_feedback(data, user_agent=user_agent, ip=ip)
    try:
        await asyncio.to_thread(writer, record.model_dump())
    except Exception as exc:
        logger.exception("Feedback insert failed: %s", exc)
        raise UpstreamError("Failed to save feedback", status_code=500) from exc
    return FeedbackResponse(success=True)
