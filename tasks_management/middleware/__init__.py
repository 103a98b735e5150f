"""ASGI middleware."""

from tasks_management.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
