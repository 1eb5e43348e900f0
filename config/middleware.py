"""
Django middleware for request-level correlation ID tracking.
"""
from config.logging_filters import correlation_scope


class CorrelationIdMiddleware:
    """Generate or propagate a correlation ID for every request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        with correlation_scope(request.headers.get("X-Correlation-ID")) as cid:
            response = self.get_response(request)
        response["X-Correlation-ID"] = cid
        return response
