"""
Relay client used by the chat widget
"""

from typing import Optional

import httpx
from pydantic import ValidationError

from ..models.chat import ChatRequest, ChatResponse


class RelayError(Exception):
    """Raised when the relay cannot produce a usable reply"""


class RelayClient:
    """Posts widget messages to the relay endpoint"""

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.chat_url = f"{base_url.rstrip('/')}/api/chat"
        self.transport = transport

    async def send(self, text: str) -> ChatResponse:
        payload = ChatRequest(message=text).model_dump()
        try:
            async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
                response = await client.post(self.chat_url, json=payload)
                response.raise_for_status()
                return ChatResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise RelayError(f"Relay returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise RelayError(f"Relay request failed: {e}") from e
        except (ValueError, ValidationError) as e:
            raise RelayError("Relay returned an unexpected body") from e
