from enum import Enum
from decimal import Decimal
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Identity, Text, String, ForeignKey, Integer, Numeric, TIMESTAMP, UniqueConstraint, \
    CheckConstraint, Index, func, Enum as SQLEnum
from app.core.database import Base


class TheaterStatus(str, Enum):
    ACTIVE = "ACTIVE"
    LOCKED = "LOCKED"


class Theater(Base):
    __tablename__ = "theaters"

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    status: Mapped[TheaterStatus] = mapped_column(SQLEnum(TheaterStatus, name="theater_status"),
                                                  nullable=False, server_default=TheaterStatus.ACTIVE.value)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    seats: Mapped[list['Seat']] = relationship(
        back_populates="theater",
        lazy='selectin',
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [Seat.row_char, Seat.seat_number]
    )

    __table_args__ = (
        CheckConstraint("total_seats >= 0", name="chk_theater_total_seats_nonneg"),
    )

    @property
    def is_editable(self) -> bool:
        return self.status != TheaterStatus.LOCKED


class SeatCategory(Base):
    __tablename__ = "seat_categories"

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, server_default="0")
    color: Mapped[str] = mapped_column(String(6), nullable=False)

    seats: Mapped[list['Seat']] = relationship(back_populates="category", lazy='noload')

    __table_args__ = (
        CheckConstraint("base_price >= 0", name="chk_seat_category_price_nonneg"),
    )


class Seat(Base):
    __tablename__ = "seats"

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    theater_id: Mapped[int] = mapped_column(ForeignKey("theaters.id", ondelete='CASCADE'), nullable=False, index=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("seat_categories.id", ondelete='RESTRICT'), nullable=False)
    row_char: Mapped[str] = mapped_column(String(1), nullable=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    real_seat_number: Mapped[int] = mapped_column(Integer, nullable=False)

    theater: Mapped['Theater'] = relationship(back_populates="seats", lazy='selectin')
    category: Mapped['SeatCategory'] = relationship(back_populates="seats", lazy='selectin')

    __table_args__ = (
        UniqueConstraint("theater_id", "row_char", "seat_number", name="uq_theater_seat_row_number"),
        CheckConstraint("row_char ~ '^[A-Z]$'", name="chk_seat_row_char"),
        CheckConstraint("seat_number > 0", name="chk_seat_number_gt0"),
        CheckConstraint("real_seat_number > 0", name="chk_seat_real_number_gt0"),
    )


Index("uq_theater_name_ci", func.lower(Theater.name), unique=True)
Index("uq_seat_category_name_ci", func.lower(SeatCategory.name), unique=True)
