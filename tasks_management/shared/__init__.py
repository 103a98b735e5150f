"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from tasks_management.shared.utils import (
    ensure_utc,
    extract_text,
    generate_uuid,
    shorten,
    utc_now,
)

__all__ = [
    "ensure_utc",
    "extract_text",
    "generate_uuid",
    "shorten",
    "utc_now",
]
