"""Custom middleware components."""

from shopadmin.core.middleware.logging import LoggingMiddleware
from shopadmin.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
