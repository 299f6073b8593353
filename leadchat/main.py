"""
Lead Chat FastAPI Application

This is the main FastAPI application entry point.
It sets up the app, middleware, error handlers and includes all routes.
"""

import logging
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .analytics import shutdown_analytics
from .config import Settings, ensure_api_key, get_settings
from .exceptions import GENERIC_ERROR_MESSAGE
from .middleware.rate_limit import FixedWindowRateLimiter, RateLimitMiddleware
from .middleware.timing import TimingMiddleware
from .services import ChatService
from .utils.debug_logger import debug_logger
from .web.routes import router as web_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent


def create_app(settings: Optional[Settings] = None, chat_service: Optional[ChatService] = None) -> FastAPI:
    """Build the relay application; exits the process if the API key is missing"""
    settings = settings or get_settings()
    ensure_api_key(settings)

    if settings.debug:
        logging.getLogger("leadchat").setLevel(logging.DEBUG)
        debug_logger.debug_enabled = True

    app = FastAPI(
        title="Lead Chat API",
        version="0.1.0",
        description="Chat widget relay to the OpenAI completion API with sales lead flagging"
    )
    app.state.settings = settings
    app.state.chat_service = chat_service or ChatService(settings)
    app.state.rate_limiter = FixedWindowRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds
    )

    # Last added runs first: CORS -> timing -> rate limit -> routes
    app.add_middleware(RateLimitMiddleware, limiter=app.state.rate_limiter)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.mount("/static", StaticFiles(directory=BASE_DIR / "web" / "static"), name="static")
    app.include_router(web_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})

    @app.on_event("shutdown")
    async def shutdown_event():
        shutdown_analytics()

    logger.info("Lead Chat relay configured (allowed origins: %s)", ", ".join(settings.allowed_origins))
    return app


app = create_app()


def run() -> None:
    """Serve the relay with uvicorn on PORT"""
    settings = get_settings()
    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
