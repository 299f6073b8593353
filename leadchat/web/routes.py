"""
Web routes for Lead Chat

This module contains the relay endpoint and the page serving the chat widget.
"""

import json
import logging
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from ..exceptions import InvalidJSONException, MissingMessageException, UpstreamError, UpstreamServiceException
from ..models.chat import ChatRequest, ChatResponse, ErrorResponse
from ..services import ChatService
from ..services.lead_qualification import LEAD_FOLLOW_UP_MESSAGE
from ..utils.debug_logger import debug_logger
from ..widget.state import GENERIC_ERROR_REPLY

logger = logging.getLogger(__name__)

router = APIRouter()

BASE_DIR = Path(__file__).parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def get_chat_service(request: Request) -> ChatService:
    """Chat service configured on the application at startup"""
    return request.app.state.chat_service


@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> HTMLResponse:
    """Serve the page hosting the chat widget"""
    return templates.TemplateResponse(request, "widget.html", {
        "lead_follow_up": LEAD_FOLLOW_UP_MESSAGE,
        "error_reply": GENERIC_ERROR_REPLY,
    })


@router.get("/favicon.ico")
def favicon():
    """Redirect favicon requests to the SVG icon"""
    return RedirectResponse(url="/static/favicon.svg")


@router.get("/health")
def health_check():
    """Health check endpoint for monitoring"""
    return {"status": "healthy", "service": "leadchat-api"}


@router.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: Request, chat_service: ChatService = Depends(get_chat_service)) -> ChatResponse:
    """
    Relay a message to the completion API

    - 400 when the body is not JSON or the message is missing/empty
    - 500 with a generic error when the upstream call fails
    """
    request_id = getattr(request.state, "request_id", str(uuid.uuid4())[:8])

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        debug_logger.log_route(request_id, "Rejected request body that is not JSON", request)
        raise InvalidJSONException()

    try:
        chat_request = ChatRequest.model_validate(body)
    except ValidationError:
        debug_logger.log_route(request_id, "Rejected request without a message", request)
        raise MissingMessageException()

    client_ip = request.client.host if request.client else None

    try:
        return await chat_service.process_chat(
            request_id=request_id,
            message=chat_request.message,
            client_ip=client_ip,
            request=request
        )
    except UpstreamError as e:
        logger.error(f"Error with OpenAI API [{request_id}]: {e}", exc_info=e.__cause__ or e)
        raise UpstreamServiceException()
