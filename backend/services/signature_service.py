import hashlib
import time
from typing import Any, Mapping, Optional

from config import Settings
from errors import ConfigurationError
from schemas import SignUploadResponse

DEFAULT_FOLDER = "puzzle-requests"
# The upload widget always sends source=uw, so it has to be part of the signed set.
UPLOAD_SOURCE = "uw"


def build_signature(params: Mapping[str, Any], api_secret: str) -> str:
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1((to_sign + api_secret).encode("utf-8")).hexdigest()


def _resolve_folder(folder: Any) -> str:
    if isinstance(folder, str) and folder.strip():
        return folder.strip()
    return DEFAULT_FOLDER


def sign_upload(
    settings: Settings,
    folder: Optional[str] = None,
    now: Optional[float] = None,
) -> SignUploadResponse:
    if not settings.cloudinary_configured:
        raise ConfigurationError("Missing Cloudinary env vars")

    timestamp = int(time.time() if now is None else now)
    params = {
        "timestamp": timestamp,
        "folder": _resolve_folder(folder),
        "source": UPLOAD_SOURCE,
    }
    signature = build_signature(params, settings.cloudinary_api_secret)
    return SignUploadResponse(
        cloudName=settings.cloudinary_cloud_name,
        apiKey=settings.cloudinary_api_key,
        timestamp=timestamp,
        folder=params["folder"],
        signature=signature,
    )
