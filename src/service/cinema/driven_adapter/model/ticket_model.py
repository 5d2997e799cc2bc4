from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class TicketModel(Base):
    """One row per sold seat; (showtime_id, seat_id) is the double-booking guard."""

    __tablename__ = 'ticket'
    __table_args__ = (
        UniqueConstraint('showtime_id', 'seat_id', name='uq_ticket_showtime_seat'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    showtime_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('showtime.id', ondelete='CASCADE'), nullable=False, index=True
    )
    seat_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('seat.id', ondelete='CASCADE'), nullable=False, index=True
    )
    customer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('customer.id', ondelete='CASCADE'), nullable=False, index=True
    )
    purchased_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {'version_id_col': version_id}
