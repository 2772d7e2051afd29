from datetime import datetime
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from app.domain.tickets.models import Ticket, TicketStatus


async def get_ticket_by_code(db: AsyncSession, ticket_code: int) -> Ticket | None:
    stmt = select(Ticket).where(Ticket.ticket_code == ticket_code)
    result = await db.execute(stmt)
    return result.scalars().first()


async def mark_ticket_used(db: AsyncSession, ticket_code: int, expected_status: str, now: datetime) -> bool:
    """Compare-and-set: flips the ticket to used only if its status is still `expected_status`."""
    stmt = (
        update(Ticket)
        .where(Ticket.ticket_code == ticket_code, Ticket.status == expected_status)
        .values(status=TicketStatus.USED.value, updated_at=now)
    )
    result = await db.execute(stmt)
    return result.rowcount == 1
