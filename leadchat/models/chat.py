"""
Chat-related data models

These models define the wire format of the relay endpoint and the
message log kept by the chat widget.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Speaker(str, Enum):
    """Author of a message in the widget log"""
    USER = "User"
    BOT = "Bot"


class Message(BaseModel):
    """A single entry in the widget message log"""
    speaker: Speaker
    text: str


class ChatRequest(BaseModel):
    """Request model for the relay endpoint"""
    message: str = Field(min_length=1)


class ChatResponse(BaseModel):
    """Response model for the relay endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    qualify_lead: bool = Field(alias="qualifyLead")


class ErrorResponse(BaseModel):
    """Body returned for every 4xx/5xx response"""
    error: str
