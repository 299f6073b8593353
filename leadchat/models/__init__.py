"""
Data models for Lead Chat

This module contains all Pydantic models for data validation and serialization.
"""

from .chat import ChatRequest, ChatResponse, ErrorResponse, Message, Speaker

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "Message",
    "Speaker"
]
