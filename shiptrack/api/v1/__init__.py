"""API v1: routers and dependency wiring."""

from shiptrack.api.v1.router import api_router

__all__ = ["api_router"]
