"""Unit tests for HTTP plumbing: error code mapping, request id sanitizing, settings limits."""

import pytest
from pydantic import ValidationError

from tasks_management.core.config import Settings
from tasks_management.core.exception_handlers import status_for_error_code
from tasks_management.middleware.request_id import sanitize_request_id


@pytest.mark.parametrize(
    "error_code,status",
    [
        ("RESOURCE_NOT_FOUND", 404),
        ("VALIDATION_ERROR", 400),
        ("INVALID_TITLE", 400),
        ("DEPENDENCY_FAILURE", 502),
        ("SOMETHING_ELSE", 400),
        (None, 400),
    ],
)
def test_status_for_error_code(error_code, status) -> None:
    assert status_for_error_code(error_code) == status


def test_sanitize_request_id_keeps_safe_value() -> None:
    assert sanitize_request_id(" req-1_A ") == "req-1_A"


@pytest.mark.parametrize("raw", [None, "", "has space", "x" * 65, "semi;colon"])
def test_sanitize_request_id_replaces_unsafe_value(raw) -> None:
    result = sanitize_request_id(raw)
    assert result != raw
    assert len(result) == 36


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.asset_summary_max_length == 500
    assert settings.bulk_delete_strict is False
    assert settings.telemetry_enabled is False


def test_settings_reject_tiny_summary_length() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, asset_summary_max_length=2)


def test_settings_reject_page_sizes() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_page_size=50, max_page_size=10)


def test_settings_reject_sample_rate_above_one() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, telemetry_sample_rate=1.5)
