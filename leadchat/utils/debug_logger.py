"""
Debug logging utility with timing support

Provides centralized debug logging with request timing and consistent formatting.
"""

import os
import time
from typing import Any, Optional


class DebugLogger:
    """Centralized debug logging with timing support"""

    def __init__(self, debug_enabled: Optional[bool] = None):
        if debug_enabled is None:
            debug_enabled = os.getenv("DEBUG_LOGGING", "false").lower() == "true"
        self.debug_enabled = debug_enabled

    def log(self,
            request_id: Optional[str],
            service: str,
            message: str,
            request: Optional[Any] = None,
            **kwargs) -> None:
        """
        Log a debug message with optional timing information

        Args:
            request_id: Unique request identifier
            service: Component name (e.g., 'RELAY', 'CHAT', 'AI')
            message: Debug message
            request: Request object carrying state.start_time, for timing
            **kwargs: Additional context to include in log
        """
        if not self.debug_enabled:
            return

        elapsed_seconds = None
        state = getattr(request, "state", None)
        if state is not None and hasattr(state, "start_time"):
            elapsed_seconds = f"{time.perf_counter() - state.start_time:.3f}s"

        timing_part = f" [{elapsed_seconds}]" if elapsed_seconds else ""
        context_part = f" [{request_id}]" if request_id else ""

        context_str = ""
        if kwargs:
            context_items = [f"{k}={v}" for k, v in kwargs.items()]
            context_str = f" {' '.join(context_items)}"

        # Format: [DEBUG] [service] [timing] [request_id] message [context]
        print(f"[DEBUG] [{service}]{timing_part}{context_part} {message}{context_str}")

    def log_route(self, request_id: Optional[str], message: str, request: Optional[Any] = None, **kwargs):
        """Log a relay route debug message"""
        self.log(request_id, "RELAY", message, request, **kwargs)

    def log_chat(self, request_id: Optional[str], message: str, request: Optional[Any] = None, **kwargs):
        """Log a chat service debug message"""
        self.log(request_id, "CHAT", message, request, **kwargs)

    def log_ai(self, request_id: Optional[str], message: str, request: Optional[Any] = None, **kwargs):
        """Log a completion API debug message"""
        self.log(request_id, "AI", message, request, **kwargs)

    def log_rate_limit(self, request_id: Optional[str], message: str, request: Optional[Any] = None, **kwargs):
        self.log(request_id, "RATE_LIMIT", message, request, **kwargs)

    def log_widget(self, message: str, **kwargs):
        self.log(None, "WIDGET", message, **kwargs)

    def log_timing(self, request_id: Optional[str], operation: str, duration_ms: float, **kwargs):
        """Log a specific timing measurement"""
        self.log(request_id, "TIMING", f"{operation} completed in {duration_ms:.3f}ms", **kwargs)


# Global debug logger instance
debug_logger = DebugLogger()
