from typing import Any, List, Optional

from pydantic import BaseModel, Field


class SignUploadResponse(BaseModel):
    cloudName: str
    apiKey: str
    timestamp: int = Field(..., description="Unix seconds the signature was minted at")
    folder: str
    signature: str = Field(..., description="SHA-1 hex digest of the signed params")


class ImageMetadata(BaseModel):
    format: str = ""
    width: float = 0
    height: float = 0


class QuoteAddons(BaseModel):
    cleanup: bool = False
    rush: bool = False
    multicolor: bool = False


class QuoteOptions(BaseModel):
    size: str
    pieces: float
    image: ImageMetadata = Field(default_factory=ImageMetadata)
    addons: QuoteAddons = Field(default_factory=QuoteAddons)


class QuoteLineItem(BaseModel):
    label: str
    amount: int


class QuoteResponse(BaseModel):
    total: int
    breakdown: List[QuoteLineItem]
    notes: List[str]


class FeedbackRecord(BaseModel):
    puzzle_code: Optional[str]
    rating: int
    comment: str
    contact: Optional[str]
    user_agent: Optional[str] = None
    ip: Optional[str] = None


class FeedbackResponse(BaseModel):
    success: bool = True


class OrderPayload(BaseModel):
    name: Any
    email: Any
    phone: Any = ""
    size: Any
    pieces: Any
    addons: Any = Field(default_factory=dict)
    total: Any
    imageUrl: Any
    imageWidth: Any = ""
    imageHeight: Any = ""
    imageFormat: Any = ""
    notes: Any = ""


class OkResponse(BaseModel):
    ok: bool = True


class ConfigStatusResponse(BaseModel):
    cloudinary: bool
    feedback_store: bool
    order_webhook: bool
