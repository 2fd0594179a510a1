"""Pure application services (no I/O)."""

from leaddesk.application.services.intent_classifier import classify_intent
from leaddesk.application.services.query_sanitizer import (
    build_like_pattern,
    build_prefix_expression,
    sanitize_query,
)

__all__ = [
    "build_like_pattern",
    "build_prefix_expression",
    "classify_intent",
    "sanitize_query",
]
