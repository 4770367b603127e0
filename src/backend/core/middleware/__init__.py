"""
Middleware classes for FastAPI application.

This package contains all custom middleware used by the application.
"""

from .correlation import CorrelationIdFilter, CorrelationIdMiddleware, get_correlation_id

__all__ = [
    "CorrelationIdFilter",
    "CorrelationIdMiddleware",
    "get_correlation_id",
]
