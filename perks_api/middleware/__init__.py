# perks_api/middleware/__init__.py
"""
Request-scoped middleware: request ids and access logging.
"""

from perks_api.middleware.logging import LoggingMiddleware
from perks_api.middleware.request_id import RequestIdMiddleware

__all__ = [
    "LoggingMiddleware",
    "RequestIdMiddleware",
]
