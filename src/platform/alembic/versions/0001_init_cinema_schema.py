"""init_cinema_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- customer: contact details, phone/email unique in canonical form
- hall: screening rooms, name unique ignoring case (name_key)
- seat: (hall_id, row, number) unique
- movie: catalogue, title unique ignoring case (title_key)
- showtime: a movie in a hall at a time, with a ticket price
- ticket: one row per sold seat, (showtime_id, seat_id) unique

Every table carries version_id for optimistic concurrency.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    # ========== Reference data ==========

    op.create_table(
        'customer',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('full_name', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=15), nullable=True),
        sa.Column('email', sa.String(length=120), nullable=True),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('phone', name='uq_customer_phone'),
        sa.UniqueConstraint('email', name='uq_customer_email'),
    )

    op.create_table(
        'hall',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('name_key', sa.String(length=50), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name_key', name='uq_hall_name_key'),
        sa.CheckConstraint('capacity > 0', name='ck_hall_capacity_positive'),
    )

    op.create_table(
        'movie',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=150), nullable=False),
        sa.Column('title_key', sa.String(length=150), nullable=False),
        sa.Column('genre', sa.String(length=50), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('release_date', sa.Date(), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title_key', name='uq_movie_title_key'),
    )

    # ========== Hall layout and schedule ==========

    op.create_table(
        'seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('hall_id', sa.Integer(), nullable=False),
        sa.Column('row', sa.String(length=10), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['hall_id'], ['hall.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hall_id', 'row', 'number', name='uq_seat_hall_row_number'),
    )
    op.create_index(op.f('ix_seat_hall_id'), 'seat', ['hall_id'], unique=False)

    op.create_table(
        'showtime',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('hall_id', sa.Integer(), nullable=False),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['hall_id'], ['hall.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_showtime_movie_id'), 'showtime', ['movie_id'], unique=False)
    op.create_index(op.f('ix_showtime_hall_id'), 'showtime', ['hall_id'], unique=False)

    # ========== Sales ==========

    op.create_table(
        'ticket',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('purchased_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtime.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['seat_id'], ['seat.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['customer_id'], ['customer.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('showtime_id', 'seat_id', name='uq_ticket_showtime_seat'),
    )
    op.create_index(op.f('ix_ticket_showtime_id'), 'ticket', ['showtime_id'], unique=False)
    op.create_index(op.f('ix_ticket_seat_id'), 'ticket', ['seat_id'], unique=False)
    op.create_index(op.f('ix_ticket_customer_id'), 'ticket', ['customer_id'], unique=False)


def downgrade() -> None:
    op.drop_table('ticket')
    op.drop_table('showtime')
    op.drop_table('seat')
    op.drop_table('movie')
    op.drop_table('hall')
    op.drop_table('customer')
