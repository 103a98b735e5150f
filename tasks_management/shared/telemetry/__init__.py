"""Telemetry: logging configuration and tracing helpers.

The tracer provider setup (telemetry.py) is imported only when
TELEMETRY_ENABLED is set, since it needs the telemetry extra.
"""

from tasks_management.shared.telemetry.logging import get_logger, setup_logging
from tasks_management.shared.telemetry.tracing import add_span_attributes, traced

__all__ = ["add_span_attributes", "get_logger", "setup_logging", "traced"]
