"""
Reservation Guard

Two layers protect every uniqueness rule:

1. Pre-check: a snapshot `any(...)` query run before staging. It rejects the common
   duplicate cheaply, but two concurrent requests can both pass it.
2. Storage constraint: the named UNIQUE constraint on the table is authoritative. When a
   racing request loses, the flush/commit raises ConstraintViolationError and
   `promote()` turns it into the same domain error the pre-check would have raised.

Usage in a workflow:
    async with uow:
        await guard.check_ticket(uow, ticket)
        with guard.promoting():
            ticket = await uow.tickets.add(ticket)
            await uow.commit()
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    ConflictError,
    ConstraintViolationError,
    CustomBaseError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_repository import IRepository
from src.service.cinema.domain.entity.customer_entity import Customer
from src.service.cinema.domain.entity.hall_entity import Hall
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.seat_entity import Seat
from src.service.cinema.domain.entity.ticket_entity import Ticket
from src.service.cinema.domain.reservation_errors import (
    DuplicateContactError,
    DuplicateHallNameError,
    DuplicateMovieTitleError,
    DuplicateSeatError,
    SeatAlreadyReservedError,
)


T = TypeVar('T')


CONSTRAINT_ERRORS: dict[str, Callable[[], CustomBaseError]] = {
    'uq_ticket_showtime_seat': SeatAlreadyReservedError,
    'uq_customer_phone': lambda: DuplicateContactError('phone'),
    'uq_customer_email': lambda: DuplicateContactError('email'),
    'uq_hall_name_key': DuplicateHallNameError,
    'uq_seat_hall_row_number': DuplicateSeatError,
    'uq_movie_title_key': DuplicateMovieTitleError,
}


class ReservationGuard:
    # ========== Reference checks ==========

    async def ensure_exists(self, repo: IRepository[T], entity_id: int, label: str) -> T:
        entity = await repo.no_tracking().get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f'{label} not found')
        return entity

    # ========== Pre-checks (snapshot reads, not authoritative) ==========

    async def check_ticket(self, uow: AbstractUnitOfWork, ticket: Ticket) -> None:
        if await uow.tickets.no_tracking().any(
            showtime_id=ticket.showtime_id, seat_id=ticket.seat_id, exclude_id=ticket.id
        ):
            raise SeatAlreadyReservedError(ticket.showtime_id, ticket.seat_id)

    async def check_customer(self, uow: AbstractUnitOfWork, customer: Customer) -> None:
        customers = uow.customers.no_tracking()
        if customer.phone and await customers.any(phone=customer.phone, exclude_id=customer.id):
            raise DuplicateContactError('phone')
        if customer.email and await customers.any(email=customer.email, exclude_id=customer.id):
            raise DuplicateContactError('email')

    async def check_hall(self, uow: AbstractUnitOfWork, hall: Hall) -> None:
        if await uow.halls.no_tracking().any(name_key=hall.name_key, exclude_id=hall.id):
            raise DuplicateHallNameError(hall.name)

    async def check_seat(self, uow: AbstractUnitOfWork, seat: Seat) -> None:
        if await uow.seats.no_tracking().any(
            hall_id=seat.hall_id, row=seat.row, number=seat.number, exclude_id=seat.id
        ):
            raise DuplicateSeatError()

    async def check_movie(self, uow: AbstractUnitOfWork, movie: Movie) -> None:
        if await uow.movies.no_tracking().any(title_key=movie.title_key, exclude_id=movie.id):
            raise DuplicateMovieTitleError(movie.title)

    # ========== Commit-time promotion ==========

    def promote(self, violation: ConstraintViolationError) -> CustomBaseError:
        if violation.foreign_key:
            return NotFoundError('Referenced record not found')

        error_factory: Optional[Callable[[], CustomBaseError]] = CONSTRAINT_ERRORS.get(
            violation.constraint or ''
        )
        if error_factory is None:
            Logger.base.warning(
                f'⚠️ [GUARD] Unmapped constraint violation: {violation.constraint} ({violation.detail})'
            )
            return ConflictError('The request conflicts with existing data')
        return error_factory()

    @contextmanager
    def promoting(self) -> Iterator[None]:
        try:
            yield
        except ConstraintViolationError as violation:
            Logger.base.info(f'🛡️ [GUARD] Storage rejected write on {violation.constraint}')
            raise self.promote(violation) from violation
