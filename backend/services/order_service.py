import logging
from typing import Any, Dict, Optional

import httpx

from config import ORDER_WEBHOOK_TOKEN_ENV, ORDER_WEBHOOK_URL_ENV, Settings
from errors import ConfigurationError, ServerError, UpstreamError, ValidationError
from request_utils import is_blank, is_truthy, to_number, to_text
from schemas import OkResponse, OrderPayload

logger = logging.getLogger("puzzle-api")

REQUIRED_FIELDS = ("name", "email", "size", "pieces", "total", "imageUrl")
HONEYPOT_FIELD = "company"
MIN_SHORTEST_SIDE = 1200
# The sheet script answers 200 for its own failures too; only this marker means stored.
SUCCESS_MARKER = "OK"


def _missing_config_message() -> str:
    return (
        f"Missing {'/'.join(ORDER_WEBHOOK_URL_ENV)} "
        f"or {'/'.join(ORDER_WEBHOOK_TOKEN_ENV)}"
    )


def is_honeypot(data: Dict[str, Any]) -> bool:
    company = data.get(HONEYPOT_FIELD)
    return is_truthy(company) and to_text(company).strip() != ""


def validate_order(data: Dict[str, Any]) -> None:
    for field in REQUIRED_FIELDS:
        if is_blank(data.get(field)):
            raise ValidationError(f"Missing field: {field}")

    width = to_number(data.get("imageWidth"))
    height = to_number(data.get("imageHeight"))
    if is_truthy(width) and is_truthy(height):
        if min(width, height) < MIN_SHORTEST_SIDE:
            raise ValidationError(
                f"Image too small. Minimum shortest side is {MIN_SHORTEST_SIDE}px."
            )


def _or_default(value: Any, default: Any) -> Any:
    return value if is_truthy(value) else default


def build_order_payload(data: Dict[str, Any]) -> OrderPayload:
    return OrderPayload(
        name=data.get("name"),
        email=data.get("email"),
        phone=_or_default(data.get("phone"), ""),
        size=data.get("size"),
        pieces=data.get("pieces"),
        addons=_or_default(data.get("addons"), {}),
        total=data.get("total"),
        imageUrl=data.get("imageUrl"),
        imageWidth=_or_default(data.get("imageWidth"), ""),
        imageHeight=_or_default(data.get("imageHeight"), ""),
        imageFormat=_or_default(data.get("imageFormat"), ""),
        notes=_or_default(data.get("notes"), ""),
    )


async def forward_order(
    data: Any,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> OkResponse:
    if not settings.order_webhook_configured:
        raise ConfigurationError(_missing_config_message())

    if not isinstance(data, dict):
        data = {}

    if is_honeypot(data):
        logger.info("Order submission dropped by honeypot")
        return OkResponse(ok=True)

    validate_order(data)
    payload = build_order_payload(data)

    try:
        async with httpx.AsyncClient(
            timeout=None, follow_redirects=True, transport=transport
        ) as client:
            response = await client.post(
                settings.order_webhook_url,
                params={"token": settings.order_webhook_token},
                json=payload.model_dump(),
            )
    except httpx.HTTPError as exc:
        logger.exception("Order webhook unreachable: %s", exc)
        raise ServerError(str(exc) or "Order webhook unreachable") from exc

    text = response.text
    if not response.is_success:
        logger.warning("Order webhook failed with status %s", response.status_code)
        raise UpstreamError(
            "Sheets webhook failed", status=response.status_code, body=text
        )
    if SUCCESS_MARKER not in text.upper():
        logger.warning("Order webhook returned unexpected response: %s", text[:200])
        raise UpstreamError("Sheets webhook returned unexpected response", body=text)

    logger.info("Order forwarded (size=%s, total=%s)", payload.size, payload.total)
    return OkResponse(ok=True)
