from contextvars import ContextVar, Token
from typing import Any

REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
ROUTE_CTX: ContextVar[str | None] = ContextVar("route", default=None)
CLIENT_IP_CTX: ContextVar[str | None] = ContextVar("client_ip", default=None)
REDIS_CTX: ContextVar[Any] = ContextVar("redis", default=None)


def bind_request(
        request_id: str,
        route: str | None,
        client_ip: str | None,
        redis_client: Any = None
) -> list[tuple[ContextVar, Token]]:
    """Bind per-request values; pass the returned tokens to `unbind` when the request ends."""
    tokens = [
        (REQUEST_ID_CTX, REQUEST_ID_CTX.set(request_id)),
        (ROUTE_CTX, ROUTE_CTX.set(route)),
        (CLIENT_IP_CTX, CLIENT_IP_CTX.set(client_ip)),
    ]
    if redis_client is not None:
        tokens.append((REDIS_CTX, REDIS_CTX.set(redis_client)))
    return tokens


def unbind(tokens: list[tuple[ContextVar, Token]]) -> None:
    for var, token in reversed(tokens):
        var.reset(token)


def get_request_id() -> str | None:
    return REQUEST_ID_CTX.get()


def get_redis() -> Any:
    return REDIS_CTX.get()


def request_meta() -> dict[str, str | None]:
    return {
        "request_id": REQUEST_ID_CTX.get(),
        "route": ROUTE_CTX.get(),
        "actor_ip": CLIENT_IP_CTX.get(),
    }
