"""
Middleware package exports.
"""

from middleware.request_id import RequestIDMiddleware
from middleware.rate_limiter import limiter, get_rate_limit_key
from middleware.metrics import FileserverMetricsMiddleware, fileserver_metrics

__all__ = ["RequestIDMiddleware", "limiter", "get_rate_limit_key",
           "FileserverMetricsMiddleware", "fileserver_metrics"]
