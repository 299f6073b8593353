"""
Chat widget state

Holds the open/closed state, the message log, the input draft and the
loading flag of one widget instance. The log lives in memory only.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from ..models.chat import Message, Speaker
from ..services.lead_qualification import LEAD_FOLLOW_UP_MESSAGE
from ..utils.debug_logger import debug_logger
from .client import RelayClient, RelayError

logger = logging.getLogger(__name__)

GENERIC_ERROR_REPLY = "Error: Unable to connect to the server. Please try again later."

LogListener = Callable[[List[Message]], None]


class WidgetState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class ChatWidget:
    """
    State machine behind the chat widget.

    Listeners registered with subscribe() are called with the full log
    after every append; views use this to keep the newest message in sight.
    """

    def __init__(self, client: RelayClient):
        self.client = client
        self.state = WidgetState.CLOSED
        self.messages: List[Message] = []
        self.input = ""
        self.is_loading = False
        self._listeners: List[LogListener] = []

    @property
    def is_open(self) -> bool:
        return self.state is WidgetState.OPEN

    @property
    def input_enabled(self) -> bool:
        return self.is_open and not self.is_loading

    def toggle(self) -> WidgetState:
        self.state = WidgetState.CLOSED if self.is_open else WidgetState.OPEN
        debug_logger.log_widget(f"Widget {self.state.value}")
        return self.state

    def subscribe(self, listener: LogListener) -> None:
        self._listeners.append(listener)

    def set_input(self, text: str) -> None:
        self.input = text

    def _append(self, speaker: Speaker, text: str) -> None:
        self.messages.append(Message(speaker=speaker, text=text))
        for listener in self._listeners:
            listener(list(self.messages))

    async def send_message(self) -> Optional[Message]:
        """
        Send the current draft to the relay.

        The user message is appended before the relay is called. Returns
        the last appended bot message, or None when nothing was sent.
        """
        if not self.input_enabled or self.input.strip() == "":
            return None

        text = self.input
        self._append(Speaker.USER, text)
        self.input = ""
        self.is_loading = True

        try:
            response = await self.client.send(text)
            self._append(Speaker.BOT, response.reply)
            if response.qualify_lead:
                self._append(Speaker.BOT, LEAD_FOLLOW_UP_MESSAGE)
        except RelayError as e:
            logger.error(f"Error sending message: {e}")
            self._append(Speaker.BOT, GENERIC_ERROR_REPLY)
        finally:
            self.is_loading = False

        return self.messages[-1]
