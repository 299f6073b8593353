"""
Chat widget for Lead Chat

The widget state machine, the relay client it talks through, and a
terminal front end.
"""

from .client import RelayClient, RelayError
from .state import GENERIC_ERROR_REPLY, ChatWidget, WidgetState

__all__ = [
    "ChatWidget",
    "GENERIC_ERROR_REPLY",
    "RelayClient",
    "RelayError",
    "WidgetState"
]
