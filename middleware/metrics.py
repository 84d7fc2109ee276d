import threading
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class FileserverMetrics:
    """Process-wide count of file server hits."""

    def __init__(self):
        self._lock = threading.Lock()
        self._hits = 0

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0


fileserver_metrics = FileserverMetrics()


class FileserverMetricsMiddleware(BaseHTTPMiddleware):
    """Counts every request under `prefix`, whatever the response."""

    def __init__(self, app, prefix: str = "/app", metrics: FileserverMetrics = fileserver_metrics):
        super().__init__(app)
        self.prefix = prefix
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path == self.prefix or path.startswith(self.prefix + "/"):
            self.metrics.increment()
        return await call_next(request)
