from .feedback import router as feedback_router
from .order_submit import router as order_submit_router
from .quote import router as quote_router
from .sign_upload import router as sign_upload_router

__all__ = [
    "feedback_router",
    "order_submit_router",
    "quote_router",
    "sign_upload_router",
]
