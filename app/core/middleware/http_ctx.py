import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from app.core.ctx import bind_request, unbind


def _client_ip(request: Request) -> str | None:
    xff = request.headers.get("x-forwarded-for")
    return xff.split(",")[0].strip() if xff else (request.client.host if request.client else None)


class HttpContextMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id (taken from the caller when present) and echoes it back."""

    def __init__(self, app, request_id_header: str = "X-Request-ID"):
        super().__init__(app)
        self.request_id_header = request_id_header

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get(self.request_id_header) or uuid.uuid4().hex
        tokens = bind_request(
            req_id,
            f"{request.method} {request.url.path}",
            _client_ip(request),
            getattr(request.app.state, "redis", None)
        )
        try:
            response = await call_next(request)
        finally:
            unbind(tokens)
        response.headers.setdefault(self.request_id_header, req_id)
        return response
