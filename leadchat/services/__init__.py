"""
Services layer for Lead Chat

This module contains the business logic behind the relay endpoint.
"""

from .ai_service import AIService
from .chat_service import ChatService
from .lead_qualification import qualifies_lead

__all__ = [
    "AIService",
    "ChatService",
    "qualifies_lead"
]
