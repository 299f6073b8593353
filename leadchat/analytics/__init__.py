"""
Analytics module for Lead Chat

This module provides a thin interface over the PostHog client.
"""

from .posthog_client import anonymize_ip, capture_event, flush_events, get_posthog_client, shutdown_analytics

__all__ = ["anonymize_ip", "capture_event", "flush_events", "get_posthog_client", "shutdown_analytics"]
