import logging
import re
from datetime import datetime, timezone
from operator import attrgetter
from typing import Callable
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.core.utils.text_utils import strip_text
from app.domain.exceptions import ScanFailure, ScanRejected
from app.domain.tickets import crud
from app.domain.tickets.models import TicketStatus
from app.domain.tickets.schemas import ScanRequestDTO, ScanResultDTO


logger = logging.getLogger("app.scan")

# Checked in order; the first non-blank value wins.
CODE_EXTRACTORS: tuple[Callable[[ScanRequestDTO], str | None], ...] = (
    attrgetter("code"),
    attrgetter("barcode"),
    attrgetter("ticket_code_camel"),
    attrgetter("ticket_code"),
)

_NUMERIC_CODE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

_REJECTIONS: dict[TicketStatus, tuple[ScanFailure, str]] = {
    TicketStatus.PENDING: (
        ScanFailure.NOT_YET_CONFIRMED,
        "Ticket is not confirmed yet. Please confirm payment first."
    ),
    TicketStatus.USED: (ScanFailure.ALREADY_USED, "This ticket has already been used."),
    TicketStatus.CANCELLED: (ScanFailure.CANCELLED, "This ticket has been cancelled and is no longer valid."),
}


def extract_code(payload: ScanRequestDTO) -> str | None:
    for extractor in CODE_EXTRACTORS:
        value = strip_text(extractor(payload))
        if value:
            return value
    return None


def parse_ticket_code(code: str) -> int:
    if not _NUMERIC_CODE.fullmatch(code):
        raise ScanRejected(ScanFailure.INVALID_FORMAT, f"Invalid ticket code: {code}", ctx={"code": code})
    value = int(code)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ScanRejected(ScanFailure.INVALID_FORMAT, f"Invalid ticket code: {code}", ctx={"code": code})
    return value


def _reject(reason: ScanFailure, message: str, ticket_code: int) -> ScanRejected:
    logger.info("Scan rejected code=%s reason=%s", ticket_code, reason.value)
    return ScanRejected(reason, message, ctx={"ticket_code": ticket_code})


async def redeem(db: AsyncSession, raw_code: str | None) -> ScanResultDTO:
    async with AuditSpan(scope="TICKETS", action="SCAN", object_type="ticket") as span:
        code = strip_text(raw_code)
        if not code:
            raise ScanRejected(ScanFailure.MISSING_CODE, "No ticket code provided in payload.")

        ticket_code = parse_ticket_code(code)
        span.ticket_code = ticket_code

        ticket = await crud.get_ticket_by_code(db, ticket_code)
        if ticket is None:
            raise _reject(ScanFailure.NOT_FOUND, f"Ticket with code {code} not found.", ticket_code)
        span.object_id = ticket.id

        status = TicketStatus.parse(ticket.status)
        if status in _REJECTIONS:
            reason, message = _REJECTIONS[status]
            raise _reject(reason, message, ticket_code)
        if status is not TicketStatus.VALID:
            raise _reject(ScanFailure.UNKNOWN_STATUS, f"Invalid ticket status: {ticket.status}.", ticket_code)

        now = datetime.now(timezone.utc)
        if not await crud.mark_ticket_used(db, ticket_code, ticket.status, now):
            # another scan of the same ticket committed first
            raise _reject(ScanFailure.ALREADY_USED, _REJECTIONS[TicketStatus.USED][1], ticket_code)
        # persist before reporting success
        await db.commit()

        logger.info("Ticket redeemed code=%s", ticket_code)
        return ScanResultDTO(codevalue=f"Ticket is valid. Status updated for ticket {code}.")


async def scan(db: AsyncSession, payload: ScanRequestDTO) -> ScanResultDTO:
    return await redeem(db, extract_code(payload))
