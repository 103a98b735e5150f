"""Shared helpers: UTC datetimes, identifier generation, text shortening and HTML stripping."""

from tasks_management.shared.utils.datetime import ensure_utc, utc_midnight, utc_now
from tasks_management.shared.utils.generators import generate_uuid
from tasks_management.shared.utils.text import extract_text, shorten

__all__ = [
    "ensure_utc",
    "extract_text",
    "generate_uuid",
    "shorten",
    "utc_midnight",
    "utc_now",
]
