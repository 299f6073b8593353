"""
Chat Service

This service runs one relay exchange: forward the message to the AI
service, flag sales leads in the reply, and record analytics.
"""

from typing import Any, Optional

from ..analytics import anonymize_ip, capture_event, flush_events
from ..config import Settings
from ..models.chat import ChatResponse
from ..utils.debug_logger import debug_logger
from .ai_service import AIService
from .lead_qualification import qualifies_lead


class ChatService:
    """Service for orchestrating relay exchanges"""

    def __init__(self, settings: Settings, ai_service: Optional[AIService] = None):
        """Initialize the chat service with dependencies"""
        self.settings = settings
        self.ai_service = ai_service or AIService(settings)

    async def process_chat(self, request_id: str, message: str, client_ip: Optional[str] = None, request: Optional[Any] = None) -> ChatResponse:
        """
        Process a chat message end-to-end

        Args:
            request_id: Unique request identifier for tracing
            message: User input text
            client_ip: Caller address, anonymized before it reaches analytics
            request: Optional request object for timing

        Returns:
            ChatResponse with the trimmed reply and the lead flag

        Raises:
            UpstreamError: when the completion API call fails
        """
        debug_logger.log_chat(
            request_id,
            f"Processing message: '{message[:50]}{'...' if len(message) > 50 else ''}'",
            request
        )

        reply = await self.ai_service.complete(message, request_id=request_id, request=request)
        qualify_lead = qualifies_lead(reply)

        debug_logger.log_chat(request_id, f"Reply ready, qualify_lead={qualify_lead}", request)

        distinct_id = anonymize_ip(client_ip)
        captured = capture_event("chat_message", {
            "message_length": len(message),
            "reply_length": len(reply),
            "qualify_lead": qualify_lead
        }, distinct_id=distinct_id)
        if qualify_lead:
            capture_event("lead_qualified", {"request_id": request_id}, distinct_id=distinct_id)
        if captured:
            flush_events()

        return ChatResponse(reply=reply, qualify_lead=qualify_lead)
