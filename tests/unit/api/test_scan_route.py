import httpx
import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError
from app.core.database import get_db
from app.main import app


@pytest.fixture
def db(mocker):
    session = mocker.Mock()
    session.commit = mocker.AsyncMock()

    async def _override():
        yield session

    app.dependency_overrides[get_db] = _override
    yield session
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _patch_ticket(mocker, ticket, applied=True):
    mocker.patch("app.services.scan_service.crud.get_ticket_by_code", new=mocker.AsyncMock(return_value=ticket))
    return mocker.patch(
        "app.services.scan_service.crud.mark_ticket_used",
        new=mocker.AsyncMock(return_value=applied)
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/TicketScan", "/tickets/scan"])
async def test_scan_valid_ticket_returns_ok(mocker, db, client, path):
    mark_used = _patch_ticket(mocker, mocker.Mock(id=1, status="valid"))

    resp = await client.post(path, json={"code": "12345"})

    assert resp.status_code == 200
    assert resp.json() == {"code": "BARCODE", "codevalue": "Ticket is valid. Status updated for ticket 12345."}
    assert resp.headers["X-Request-ID"]
    mark_used.assert_awaited_once()
    db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_scan_accepts_numeric_barcode_field(mocker, db, client):
    _patch_ticket(mocker, mocker.Mock(id=1, status="valid"))

    resp = await client.post("/tickets/scan", json={"Barcode": 777})

    assert resp.status_code == 200
    assert resp.json()["codevalue"].endswith("ticket 777.")


@pytest.mark.asyncio
async def test_scan_echoes_request_id(mocker, db, client):
    _patch_ticket(mocker, mocker.Mock(id=1, status="valid"))

    resp = await client.post("/tickets/scan", json={"code": "1"}, headers={"X-Request-ID": "gate-7"})

    assert resp.headers["X-Request-ID"] == "gate-7"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, status_code, message",
    [
        ({}, 400, "No ticket code provided in payload."),
        ({"code": "ABC"}, 400, "Invalid ticket code: ABC"),
        ({"code": "404"}, 404, "Ticket with code 404 not found."),
    ]
)
async def test_scan_rejections_keep_barcode_body(mocker, db, client, payload, status_code, message):
    _patch_ticket(mocker, None)

    resp = await client.post("/tickets/scan", json=payload)

    assert resp.status_code == status_code
    assert resp.json() == {"code": "BARCODE", "codevalue": message}


@pytest.mark.asyncio
async def test_scan_used_ticket_returns_400(mocker, db, client):
    mark_used = _patch_ticket(mocker, mocker.Mock(id=1, status="used"))

    resp = await client.post("/api/TicketScan", json={"ticketCode": "5"})

    assert resp.status_code == 400
    assert resp.json()["codevalue"] == "This ticket has already been used."
    mark_used.assert_not_awaited()


@pytest.mark.asyncio
async def test_scan_storage_failure_returns_problem(mocker, db, client):
    mocker.patch(
        "app.services.scan_service.crud.get_ticket_by_code",
        new=mocker.AsyncMock(side_effect=OperationalError("select", None, Exception("down")))
    )

    resp = await client.post("/tickets/scan", json={"code": "5"})

    assert resp.status_code == 503
    assert resp.headers["content-type"].startswith("application/problem+json")
    assert resp.json()["detail"] == "Storage failure, no changes were saved"


@pytest.mark.asyncio
async def test_scan_failed_commit_does_not_report_valid(mocker, db, client):
    _patch_ticket(mocker, mocker.Mock(id=1, status="valid"))
    db.commit = mocker.AsyncMock(side_effect=OperationalError("COMMIT", None, Exception("connection reset")))

    resp = await client.post("/api/TicketScan", json={"code": "12345"})

    assert resp.status_code == 503
    assert "Ticket is valid" not in resp.text
