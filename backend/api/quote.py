from fastapi import APIRouter, Request, Response

from errors import ApiError, ServerError
from request_utils import read_json_body
from schemas import QuoteResponse
from services.quote_service import calculate_quote

router = APIRouter(prefix="/api/quote", tags=["quote"])

NO_STORE_HEADERS = {"Cache-Control": "no-store"}


@router.post("", response_model=QuoteResponse)
async def create_quote(request: Request, response: Response) -> QuoteResponse:
    try:
        data = await read_json_body(request)
        quote = calculate_quote(data)
    except ApiError as exc:
        exc.headers.update(NO_STORE_HEADERS)
        raise
    except Exception as exc:
        raise ServerError(str(exc) or "Server error", headers=NO_STORE_HEADERS) from exc
    response.headers.update(NO_STORE_HEADERS)
    return quote
