import os

os.environ.setdefault("POSTGRES_USER", "stagex")
os.environ.setdefault("db_password", "stagex")
os.environ.setdefault("POSTGRES_DB", "stagex_test")

import pytest
import importlib


SERVICE_MODULES = [
    "app.services.scan_service",
    "app.services.seat_category_service",
    "app.services.theater_service",
]

class _StubSpan:
    def __init__(
        self,
        *,
        scope: str,
        action: str,
        object_type: str | None = None,
        object_id: int | None = None,
        theater_id: int | None = None,
        ticket_code: int | None = None,
        meta: dict | None = None,
        **_ignored
    ):
        self.scope = scope
        self.action = action
        self.object_type = object_type
        self.object_id = object_id
        self.theater_id = theater_id
        self.ticket_code = ticket_code
        self.meta = dict(meta or {})
        self.entered = False
        self.exited = False
        self.exit_args = None

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.exited = True
        self.exit_args = (exc_type, exc, tb)
        return False


@pytest.fixture(autouse=True)
def auditspan_stub(mocker, request):
    instances = []

    def factory(*a, **k):
        s = _StubSpan(*a, **k)
        instances.append(s)
        return s

    for mod in SERVICE_MODULES:
        importlib.import_module(mod)
        mocker.patch(f"{mod}.AuditSpan", side_effect=factory)

    return instances
