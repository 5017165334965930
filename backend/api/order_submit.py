from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request

from config import Settings, get_settings
from errors import ApiError, ServerError
from request_utils import read_json_body
from schemas import OkResponse
from services.order_service import forward_order

router = APIRouter(prefix="/api/order-submit", tags=["orders"])


def get_webhook_transport() -> Optional[httpx.AsyncBaseTransport]:
    return None


async def _lenient_body(request: Request):
    try:
        return await read_json_body(request)
    except ValueError:
        return {}


@router.post("", response_model=OkResponse)
async def submit_order(
    request: Request,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_webhook_transport),
) -> OkResponse:
    try:
        data = await _lenient_body(request)
        return await forward_order(data, settings, transport=transport)
    except ApiError:
        raise
    except Exception as exc:
        raise ServerError(str(exc) or "Server error") from exc
