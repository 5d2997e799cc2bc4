from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.write_tracking import track_write
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.domain.entity.ticket_entity import Ticket


class CreateTicketUseCase:
    """
    Sell one seat of one showtime to a customer

    Flow:
    1. Showtime, seat and customer must exist (NotFound)
    2. Pre-check: seat not yet sold for this showtime (SeatAlreadyReserved, fail fast)
    3. Stage the ticket and commit
    4. A racing request that slipped past the pre-check is stopped by
       `uq_ticket_showtime_seat`; the violation is promoted to SeatAlreadyReserved

    No retry: the loser of a race gets the conflict and the seat stays with the winner.
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
    async def create_ticket(
        self,
        *,
        showtime_id: int,
        seat_id: int,
        customer_id: int,
        purchased_at: Optional[datetime] = None,
    ) -> Ticket:
        with (
            self.tracer.start_as_current_span(
                'use_case.create_ticket',
                attributes={'showtime.id': showtime_id, 'seat.id': seat_id},
            ),
            track_write(entity='ticket', operation='create'),
        ):
            ticket = Ticket(
                showtime_id=showtime_id,
                seat_id=seat_id,
                customer_id=customer_id,
                purchased_at=purchased_at or datetime.now(timezone.utc),
            )

            async with self.uow:
                await self.guard.ensure_exists(self.uow.showtimes, showtime_id, 'Showtime')
                await self.guard.ensure_exists(self.uow.seats, seat_id, 'Seat')
                await self.guard.ensure_exists(self.uow.customers, customer_id, 'Customer')

                await self.guard.check_ticket(self.uow, ticket)

                with self.guard.promoting():
                    created = await self.uow.tickets.add(ticket)
                    await self.uow.commit()

            Logger.base.info(
                f'🎟️ [CREATE-TICKET] Seat {seat_id} sold for showtime {showtime_id} '
                f'(ticket {created.id})'
            )
            return created
