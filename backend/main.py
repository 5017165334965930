import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import (
    feedback_router,
    order_submit_router,
    quote_router,
    sign_upload_router,
)
from config import Settings, get_settings, settings
from errors import ApiError
from schemas import ConfigStatusResponse

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("puzzle-api")

app = FastAPI(title="Puzzle Landing API")

# Paths called cross-origin from the public landing page.
PUBLIC_CORS_PATHS = ("/api/feedback",)

app.include_router(sign_upload_router)
app.include_router(quote_router)
app.include_router(feedback_router)
app.include_router(order_submit_router)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(),
        headers=exc.headers or None,
    )


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return PlainTextResponse("Method Not Allowed", status_code=405)
    return await http_exception_handler(request, exc)


@app.middleware("http")
async def public_cors(request, call_next):
    public = request.url.path.rstrip("/") in PUBLIC_CORS_PATHS
    if request.method == "OPTIONS":
        origin = request.headers.get("origin", "")
        logger.info("CORS preflight %s %s origin=%s", request.method, request.url.path, origin)
    response = await call_next(request)
    if public:
        response.headers["Access-Control-Allow-Origin"] = "*"
    return response


@app.get("/api/diag/config", response_model=ConfigStatusResponse)
async def config_diag(settings: Settings = Depends(get_settings)) -> ConfigStatusResponse:
    return ConfigStatusResponse(
        cloudinary=settings.cloudinary_configured,
        feedback_store=settings.feedback_store_configured,
        order_webhook=settings.order_webhook_configured,
    )
