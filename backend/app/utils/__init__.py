"""Utility functions and helpers."""

from app.utils.body_limit import BodySizeLimitMiddleware

__all__ = [
    "BodySizeLimitMiddleware",
]
