"""ASGI middleware."""

from shiptrack.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
