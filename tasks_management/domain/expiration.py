"""Expiration date assembly and title normalization for tasks."""

from datetime import datetime

from tasks_management.domain.exceptions import (
    InvalidExpirationDateException,
    InvalidTitleException,
)
from tasks_management.shared.utils.datetime import utc_midnight


def assemble_expiration_date(month: int, day: int, year: int) -> datetime:
    """Build a UTC midnight datetime from 1-based month, day and year.

    Used identically by task creation and update, so the time of day is
    always zero.

    Raises:
        InvalidExpirationDateException: When the parts do not form a calendar date.
    """
    try:
        return utc_midnight(year, month, day)
    except (TypeError, ValueError) as e:
        raise InvalidExpirationDateException(month, day, year) from e


def normalize_title(title: str | None) -> str:
    """Return the trimmed title.

    Raises:
        InvalidTitleException: When the title is None, empty or whitespace only.
    """
    normalized = (title or "").strip()
    if not normalized:
        raise InvalidTitleException()
    return normalized
