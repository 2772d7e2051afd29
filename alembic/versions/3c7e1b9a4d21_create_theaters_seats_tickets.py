"""create theaters, seat categories, seats and tickets

Revision ID: 3c7e1b9a4d21
Revises:
Create Date: 2026-10-19 10:12:44.218311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c7e1b9a4d21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


theater_status = sa.Enum('ACTIVE', 'LOCKED', name='theater_status')


def upgrade():
    op.create_table(
        'theaters',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('total_seats', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', theater_status, nullable=False, server_default='ACTIVE'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('total_seats >= 0', name='chk_theater_total_seats_nonneg'),
    )
    op.create_index('uq_theater_name_ci', 'theaters', [sa.text('lower(name)')], unique=True)

    op.create_table(
        'seat_categories',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('color', sa.String(6), nullable=False),
        sa.CheckConstraint('base_price >= 0', name='chk_seat_category_price_nonneg'),
    )
    op.create_index('uq_seat_category_name_ci', 'seat_categories', [sa.text('lower(name)')], unique=True)

    op.create_table(
        'seats',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), primary_key=True),
        sa.Column('theater_id', sa.Integer(), sa.ForeignKey('theaters.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('seat_categories.id', ondelete='RESTRICT'),
                  nullable=False),
        sa.Column('row_char', sa.String(1), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('real_seat_number', sa.Integer(), nullable=False),
        sa.UniqueConstraint('theater_id', 'row_char', 'seat_number', name='uq_theater_seat_row_number'),
        sa.CheckConstraint("row_char ~ '^[A-Z]$'", name='chk_seat_row_char'),
        sa.CheckConstraint('seat_number > 0', name='chk_seat_number_gt0'),
        sa.CheckConstraint('real_seat_number > 0', name='chk_seat_real_number_gt0'),
    )
    op.create_index('ix_seats_theater_id', 'seats', ['theater_id'])

    op.create_table(
        'tickets',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), primary_key=True),
        sa.Column('ticket_code', sa.BigInteger(), nullable=False),
        sa.Column('status', sa.Text(), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index('ix_tickets_ticket_code', 'tickets', ['ticket_code'], unique=True)


def downgrade():
    op.drop_index('ix_tickets_ticket_code', table_name='tickets')
    op.drop_table('tickets')
    op.drop_index('ix_seats_theater_id', table_name='seats')
    op.drop_table('seats')
    op.drop_index('uq_seat_category_name_ci', table_name='seat_categories')
    op.drop_table('seat_categories')
    op.drop_index('uq_theater_name_ci', table_name='theaters')
    op.drop_table('theaters')
    theater_status.drop(op.get_bind(), checkfirst=True)
