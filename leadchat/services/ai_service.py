"""
AI Service for Lead Chat

This service forwards a single user message to the OpenAI chat
completions API and returns the trimmed reply text.
"""

from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings
from ..exceptions import UpstreamError
from ..utils.debug_logger import debug_logger

# The relay always talks to the same model
OPENAI_MODEL = "gpt-4"


class AIService:
    """Service for the external completion API"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the AI service from settings

        Args:
            settings: Application settings holding the API key and base URL
            transport: Optional httpx transport, used by tests to stub the API
        """
        self.model_id = OPENAI_MODEL
        self.api_key = settings.openai_api_key
        self.completions_url = f"{settings.openai_base_url.rstrip('/')}/chat/completions"
        self.transport = transport

    def build_messages(self, message: str) -> List[Dict[str, str]]:
        """Single-turn prompt: the user message and nothing else"""
        return [{"role": "user", "content": message}]

    async def _post_completion(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        # No client timeout on the upstream call
        async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
            response = await client.post(
                self.completions_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
            )
            response.raise_for_status()
            return response.json()

    @staticmethod
    def _extract_reply(result: Dict[str, Any]) -> str:
        return result["choices"][0]["message"]["content"].strip()

    async def complete(self, message: str, request_id: Optional[str] = None, request: Optional[Any] = None) -> str:
        """
        Send a message to the completion API

        Args:
            message: The user's message
            request_id: Optional request ID for logging consistency
            request: Optional request object for timing

        Returns:
            The reply text with surrounding whitespace removed

        Raises:
            UpstreamError: on transport errors, non-2xx responses or a malformed payload
        """
        payload = {
            "model": self.model_id,
            "messages": self.build_messages(message),
        }
        debug_logger.log_ai(request_id, f"Calling {self.model_id} with {len(message)} characters", request)

        try:
            result = await self._post_completion(payload)
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f"Completion API returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Completion API request failed: {e}") from e
        except ValueError as e:
            raise UpstreamError("Completion API returned invalid JSON") from e

        try:
            reply = self._extract_reply(result)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise UpstreamError("Completion API returned an unexpected payload") from e

        debug_logger.log_ai(request_id, f"Completion returned {len(reply)} characters", request)
        return reply
