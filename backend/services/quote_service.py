from typing import Any, Dict, List

from errors import ValidationError
from request_utils import is_truthy, to_number, to_text
from schemas import (
    ImageMetadata,
    QuoteAddons,
    QuoteLineItem,
    QuoteOptions,
    QuoteResponse,
)

BASE_PRICES = {"100": 38, "150": 60}
SUPPORTED_PIECES = 100
ALLOWED_FORMATS = {"jpg", "jpeg", "png"}

# Shortest image side, in pixels.
HARD_MIN_SHORTEST_SIDE = 300
MIN_SHORTEST_SIDE = 1200
RECOMMENDED_SHORTEST_SIDE = 2000

# Applied in this order when the flag is set.
ADDON_PRICES = (
    ("multicolor", "Multi-color", 5),
    ("cleanup", "Image cleanup", 15),
    ("rush", "Rush", 15),
)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _dimension(value: Any) -> float:
    number = to_number(value)
    return number if is_truthy(number) else 0


def parse_quote_options(data: Dict[str, Any]) -> QuoteOptions:
    raw_pieces = data.get("pieces")
    image = _as_dict(data.get("image"))
    addons = _as_dict(data.get("addons"))
    raw_format = image.get("format")

    return QuoteOptions(
        size=to_text(data.get("size")),
        pieces=to_number(raw_pieces) if is_truthy(raw_pieces) else SUPPORTED_PIECES,
        image=ImageMetadata(
            format=to_text(raw_format).lower() if is_truthy(raw_format) else "",
            width=_dimension(image.get("width")),
            height=_dimension(image.get("height")),
        ),
        addons=QuoteAddons(
            cleanup=is_truthy(addons.get("cleanup")),
            rush=is_truthy(addons.get("rush")),
            multicolor=is_truthy(addons.get("multicolor")),
        ),
    )


def _shortest_side(image: ImageMetadata) -> float:
    return min(image.width, image.height)


def _has_dimensions(image: ImageMetadata) -> bool:
    return bool(image.width and image.height)


def validate_quote_options(options: QuoteOptions) -> None:
    if options.size not in BASE_PRICES:
        raise ValidationError("Invalid size. Must be 100 or 150.")
    if options.pieces != SUPPORTED_PIECES:
        raise ValidationError("Invalid pieces. Only 100 pieces supported right now.")

    image = options.image
    if image.format and image.format not in ALLOWED_FORMATS:
        raise ValidationError("Invalid image format. Use JPG or PNG.")
    if _has_dimensions(image) and _shortest_side(image) < HARD_MIN_SHORTEST_SIDE:
        raise ValidationError(
            "Image resolution too small to quote. Upload a higher-resolution image."
        )


def build_breakdown(options: QuoteOptions) -> List[QuoteLineItem]:
    size = options.size
    breakdown = [
        QuoteLineItem(label=f"Base ({size}×{size}, 100 pcs)", amount=BASE_PRICES[size])
    ]
    for flag, label, amount in ADDON_PRICES:
        if getattr(options.addons, flag):
            breakdown.append(QuoteLineItem(label=label, amount=amount))
    return breakdown


def quality_note(image: ImageMetadata) -> str:
    if not _has_dimensions(image):
        return "ℹ️ Image metadata not provided. Upload an image to get quality feedback."

    dimensions = f"{to_text(image.width)}×{to_text(image.height)}"
    shortest = _shortest_side(image)
    if shortest < MIN_SHORTEST_SIDE:
        return (
            f"⚠️ Low resolution ({dimensions}). "
            f"Minimum is {MIN_SHORTEST_SIDE}px on shortest side."
        )
    if shortest < RECOMMENDED_SHORTEST_SIDE:
        return (
            f"👍 OK ({dimensions}). "
            f"For best results, use {RECOMMENDED_SHORTEST_SIDE}px+ shortest side."
        )
    return f"✅ Great resolution ({dimensions})."


def calculate_quote(data: Any) -> QuoteResponse:
    if not isinstance(data, dict):
        data = {}

    options = parse_quote_options(data)
    validate_quote_options(options)

    breakdown = build_breakdown(options)
    return QuoteResponse(
        total=sum(item.amount for item in breakdown),
        breakdown=breakdown,
        notes=[quality_note(options.image)],
    )
