import logging
import time

logger = logging.getLogger(__name__)


class RequestLogMiddleware:
    """Log one line per request: method, path, status and duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info('%s %s -> %s (%.1f ms)', request.method, request.path, response.status_code, elapsed_ms)
        return response
