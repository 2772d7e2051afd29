from enum import Enum
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Identity, BigInteger, Text, TIMESTAMP, func
from app.core.database import Base


class TicketStatus(str, Enum):
    PENDING = "pending"
    VALID = "valid"
    USED = "used"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, raw: str | None) -> "TicketStatus | None":
        if raw is None:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


class Ticket(Base):
    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    ticket_code: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)
    # Plain text so rows written by older clients with unexpected values still load.
    status: Mapped[str] = mapped_column(Text, nullable=False, server_default=TicketStatus.PENDING.value)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
