"""
PostHog Analytics Client for Lead Chat

This module provides PostHog integration with lazy initialization.
Only initializes when POSTHOG_API_KEY is set and never under pytest.
"""

import logging
import os
from typing import Any, Dict, Optional

import posthog

logger = logging.getLogger(__name__)

# Global PostHog client (lazy initialized)
analytics_posthog: Optional[Any] = None


def _is_test_environment() -> bool:
    """
    Check if we're running in a test environment.

    Returns:
        bool: True if running in tests, False otherwise
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None or "pytest" in os.getenv("_", "")


def _initialize_posthog() -> Optional[Any]:
    """
    Initialize the PostHog client if an API key is configured.

    Returns:
        The configured posthog module or None when analytics are disabled
    """
    api_key = os.getenv("POSTHOG_API_KEY")
    if not api_key:
        logger.info("PostHog disabled: POSTHOG_API_KEY environment variable not set")
        return None

    try:
        posthog.api_key = api_key
        posthog.host = os.getenv("POSTHOG_HOST", "https://app.posthog.com")
        posthog.debug = os.getenv("DEBUG_LOGGING", "false").lower() == "true"

        logger.info("PostHog client initialized: host=%s", posthog.host)
        return posthog

    except Exception as e:
        logger.error(f"PostHog initialization failed: {e}")
        return None


def get_posthog_client() -> Optional[Any]:
    """
    Get PostHog client instance with lazy initialization.

    Returns:
        PostHog client instance or None if disabled
    """
    global analytics_posthog

    if analytics_posthog is None:
        analytics_posthog = _initialize_posthog()

    return analytics_posthog


def anonymize_ip(client_ip: Optional[str]) -> Optional[str]:
    """Zero the last octet of an IPv4 address; other values are returned unchanged"""
    if not client_ip:
        return None
    ip_parts = client_ip.split(".")
    if len(ip_parts) == 4:
        ip_parts[-1] = "0"
        return ".".join(ip_parts)
    return client_ip


def capture_event(event_name: str, properties: Optional[Dict[str, Any]] = None, distinct_id: Optional[str] = None) -> bool:
    """
    Safely capture an event with PostHog.

    Args:
        event_name: Name of the event to capture
        properties: Optional event properties dictionary
        distinct_id: Optional distinct user ID (defaults to 'anonymous')

    Returns:
        bool: True if event was captured successfully, False otherwise
    """
    if _is_test_environment():
        logger.debug(f"PostHog disabled in test environment: Event '{event_name}' not captured")
        return False

    client = get_posthog_client()
    if not client:
        logger.debug(f"PostHog disabled: Event '{event_name}' not captured")
        return False

    try:
        client.capture(
            distinct_id=distinct_id or "anonymous",
            event=event_name,
            properties=properties or {}
        )
        logger.debug(f"PostHog event captured: '{event_name}'")
        return True

    except Exception as e:
        logger.error(f"Failed to capture PostHog event '{event_name}': {e}")
        return False


def flush_events() -> bool:
    """
    Flush pending PostHog events.

    Returns:
        bool: True if events were flushed successfully, False otherwise
    """
    client = get_posthog_client()
    if not client:
        return False

    try:
        client.flush()
        return True
    except Exception as e:
        logger.error(f"Failed to flush PostHog events: {e}")
        return False


def shutdown_analytics() -> None:
    """Flush and stop the PostHog consumer thread on application shutdown"""
    client = analytics_posthog
    if not client:
        return
    try:
        client.shutdown()
    except Exception as e:
        logger.error(f"Failed to shut down PostHog client: {e}")
