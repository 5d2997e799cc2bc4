from datetime import datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConcurrencyConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.write_tracking import track_write
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.domain.entity.ticket_entity import Ticket


class UpdateTicketUseCase:
    """
    Move a ticket to another showtime/seat/customer.

    The ticket is read tracked, so the commit is checked against the row version that
    was read: if another request changed or deleted it meanwhile the commit raises
    ConcurrencyConflictError and nothing is written.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, guard: ReservationGuard) -> None:
        self.uow = uow
        self.guard = guard
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        guard: ReservationGuard = Depends(Provide[Container.reservation_guard]),
    ) -> Self:
        return cls(uow=uow, guard=guard)

    @Logger.io
    async def update_ticket(
        self,
        *,
        ticket_id: int,
        showtime_id: int,
        seat_id: int,
        customer_id: int,
        purchased_at: Optional[datetime] = None,
    ) -> Ticket:
        with (
            self.tracer.start_as_current_span(
                'use_case.update_ticket', attributes={'ticket.id': ticket_id}
            ),
            track_write(entity='ticket', operation='update'),
        ):
            async with self.uow:
                ticket = await self.uow.tickets.get_by_id(ticket_id)
                if ticket is None:
                    raise NotFoundError('Ticket not found')

                await self.guard.ensure_exists(self.uow.showtimes, showtime_id, 'Showtime')
                await self.guard.ensure_exists(self.uow.seats, seat_id, 'Seat')
                await self.guard.ensure_exists(self.uow.customers, customer_id, 'Customer')

                ticket.showtime_id = showtime_id
                ticket.seat_id = seat_id
                ticket.customer_id = customer_id
                if purchased_at is not None:
                    ticket.purchased_at = purchased_at

                await self.guard.check_ticket(self.uow, ticket)

                with self.guard.promoting():
                    await self.uow.tickets.update(ticket)
                    await self.uow.commit()

                updated = await self.uow.tickets.get_by_id(ticket_id)

            if updated is None:
                raise ConcurrencyConflictError()
            return updated
