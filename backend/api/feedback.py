import logging
from functools import partial

from fastapi import APIRouter, Depends, Request, Response, status

from config import Settings, get_settings
from errors import ApiError, ServerError
from repositories.feedback_repository import insert_feedback
from request_utils import client_ip, read_json_body
from schemas import FeedbackResponse
from services.feedback_service import FeedbackWriter, record_feedback

logger = logging.getLogger("puzzle-api")

router = APIRouter(prefix="/api/feedback", tags=["feedback"])

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def get_feedback_writer(settings: Settings = Depends(get_settings)) -> FeedbackWriter:
    return partial(insert_feedback, settings=settings)


@router.options("")
async def feedback_preflight() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=PREFLIGHT_HEADERS)


@router.post("", response_model=FeedbackResponse)
async def submit_feedback(
    request: Request,
    writer: FeedbackWriter = Depends(get_feedback_writer),
) -> FeedbackResponse:
    try:
        data = await read_json_body(request)
        return await record_feedback(
            data,
            user_agent=request.headers.get("user-agent"),
            ip=client_ip(request.headers),
            writer=writer,
        )
    except ApiError:
        raise
    except Exception as exc:
        logger.exception("Feedback submission failed: %s", exc)
        raise ServerError("Server error") from exc
