from fastapi import APIRouter, Depends, Request

from config import Settings, get_settings
from errors import ApiError, ServerError
from request_utils import read_json_body
from schemas import SignUploadResponse
from services.signature_service import sign_upload

router = APIRouter(prefix="/api/sign-upload", tags=["uploads"])


async def _requested_folder(request: Request):
    try:
        body = await read_json_body(request)
    except ValueError:
        return None
    return body.get("folder") if isinstance(body, dict) else None


@router.post("", response_model=SignUploadResponse)
async def create_upload_signature(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> SignUploadResponse:
    try:
        folder = await _requested_folder(request)
        return sign_upload(settings, folder=folder)
    except ApiError:
        raise
    except Exception as exc:
        raise ServerError(str(exc) or "Server error") from exc
