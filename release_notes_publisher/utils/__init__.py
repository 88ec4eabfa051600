"""Utility modules for shared functionality."""

from .constants import (
    FIELD_MARKERS,
    FILTER_REMOVALS,
    SECURITY_SENTENCES,
    TYPE_FIELD_MARKER,
)
from .retry import retry_idempotent_request

__all__ = [
    "FIELD_MARKERS",
    "FILTER_REMOVALS",
    "TYPE_FIELD_MARKER",
    "SECURITY_SENTENCES",
    "retry_idempotent_request",
]
