"""
Double-booking and lost-update protection against a real database.

The pre-check alone is racy; these tests force the race and check that the storage
constraint and the row version still keep the data consistent.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.exception.exceptions import ConcurrencyConflictError, ConstraintViolationError
from src.service.cinema.app.command.create_customer_use_case import CreateCustomerUseCase
from src.service.cinema.app.command.create_ticket_use_case import CreateTicketUseCase
from src.service.cinema.app.command.delete_entity_use_case import DeleteEntityUseCase
from src.service.cinema.app.command.update_customer_use_case import UpdateCustomerUseCase
from src.service.cinema.app.command.update_ticket_use_case import UpdateTicketUseCase
from src.service.cinema.app.interface.i_repository import IRepository
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.domain.entity.customer_entity import Customer
from src.service.cinema.domain.entity.ticket_entity import Ticket
from src.service.cinema.domain.reservation_errors import (
    DuplicateContactError,
    SeatAlreadyReservedError,
)
from test.service.cinema.fixtures import Catalog


UowFactory = Callable[[], SqlAlchemyUnitOfWork]


class RacingGuard(ReservationGuard):
    """Holds every request after its pre-check until all of them have passed it."""

    def __init__(self, parties: int) -> None:
        self.barrier = asyncio.Barrier(parties)

    async def check_ticket(self, uow: Any, ticket: Ticket) -> None:
        await super().check_ticket(uow, ticket)
        await self.barrier.wait()

    async def check_customer(self, uow: Any, customer: Customer) -> None:
        await super().check_customer(uow, customer)
        await self.barrier.wait()


class InterferingUnitOfWork(SqlAlchemyUnitOfWork):
    """Lets another request write between this request's reads and its commit."""

    def __init__(
        self, session_factory: Any, *, interference: Callable[[], Awaitable[None]]
    ) -> None:
        super().__init__(session_factory)
        self._interference: Callable[[], Awaitable[None]] | None = interference

    async def _commit(self) -> int:
        if self._interference is not None:
            interference, self._interference = self._interference, None
            await interference()
        return await super()._commit()


async def _count(uow_factory: UowFactory, repo_name: str) -> int:
    async with uow_factory() as uow:
        repo: IRepository[Any] = getattr(uow, repo_name)
        return len(await repo.no_tracking().get_all())


@pytest.mark.integration
class TestCustomerContactUniqueness:
    async def test_same_phone_in_two_spellings_is_a_duplicate(
        self, uow_factory: UowFactory, guard: ReservationGuard
    ) -> None:
        # Given
        use_case = CreateCustomerUseCase(uow=uow_factory(), guard=guard)
        jane = await use_case.create_customer(full_name='Jane Doe', phone='0501234567')

        # When / Then
        with pytest.raises(DuplicateContactError) as exc_info:
            await use_case.create_customer(full_name='John Roe', phone='971501234567')

        assert jane.phone == '+971501234567'
        assert exc_info.value.field == 'phone'
        assert await _count(uow_factory, 'customers') == 1

    @pytest.mark.parametrize(
        'first, second, field, constraint',
        [
            (
                {'phone': '0501234567'},
                {'phone': '+971 50 123 4567'},
                'phone',
                'uq_customer_phone',
            ),
            (
                {'email': 'jane@x.io'},
                {'email': ' JANE@X.IO '},
                'email',
                'uq_customer_email',
            ),
        ],
    )
    async def test_concurrent_registrations_have_exactly_one_winner(
        self,
        uow_factory: UowFactory,
        first: dict[str, str],
        second: dict[str, str],
        field: str,
        constraint: str,
    ) -> None:
        # Given: both requests pass the pre-check before either one writes
        guard = RacingGuard(parties=2)

        # When
        results = await asyncio.gather(
            CreateCustomerUseCase(uow=uow_factory(), guard=guard).create_customer(
                full_name='Jane Doe', **first
            ),
            CreateCustomerUseCase(uow=uow_factory(), guard=guard).create_customer(
                full_name='Jane D.', **second
            ),
            return_exceptions=True,
        )

        # Then
        created = [r for r in results if isinstance(r, Customer)]
        rejected = [r for r in results if isinstance(r, DuplicateContactError)]
        assert len(created) == 1
        assert len(rejected) == 1
        assert rejected[0].field == field
        violation = rejected[0].__cause__
        assert isinstance(violation, ConstraintViolationError)
        assert violation.constraint == constraint
        assert await _count(uow_factory, 'customers') == 1


@pytest.mark.integration
class TestSeatDoubleBooking:
    async def test_seat_sold_once_per_showtime(
        self, uow_factory: UowFactory, guard: ReservationGuard, catalog: Catalog
    ) -> None:
        use_case = CreateTicketUseCase(uow=uow_factory(), guard=guard)
        first_show, second_show = catalog.showtimes
        seat = catalog.seats[4]

        # Given: the seat is sold for the first showtime
        sold = await use_case.create_ticket(
            showtime_id=first_show.id, seat_id=seat.id, customer_id=catalog.jane.id
        )

        # Then: selling it again for that showtime fails
        with pytest.raises(SeatAlreadyReservedError):
            await use_case.create_ticket(
                showtime_id=first_show.id, seat_id=seat.id, customer_id=catalog.john.id
            )

        # And: the same seat is still free for another showtime
        other = await use_case.create_ticket(
            showtime_id=second_show.id, seat_id=seat.id, customer_id=catalog.john.id
        )

        assert sold.id is not None and other.id is not None
        assert sold.version_id == 1
        assert await _count(uow_factory, 'tickets') == 2

    async def test_race_past_pre_check_is_stopped_by_constraint(
        self, uow_factory: UowFactory, guard: ReservationGuard, catalog: Catalog
    ) -> None:
        showtime, seat = catalog.showtimes[0], catalog.seats[4]
        ticket_a = Ticket(showtime_id=showtime.id, seat_id=seat.id, customer_id=catalog.jane.id)
        ticket_b = Ticket(showtime_id=showtime.id, seat_id=seat.id, customer_id=catalog.john.id)

        async with uow_factory() as uow_a, uow_factory() as uow_b:
            # Both requests pass the pre-check before either one writes
            await guard.check_ticket(uow_a, ticket_a)
            await guard.check_ticket(uow_b, ticket_b)

            with guard.promoting():
                await uow_a.tickets.add(ticket_a)
                await uow_a.commit()

            with pytest.raises(SeatAlreadyReservedError) as exc_info:
                with guard.promoting():
                    await uow_b.tickets.add(ticket_b)
                    await uow_b.commit()

        violation = exc_info.value.__cause__
        assert isinstance(violation, ConstraintViolationError)
        assert violation.constraint == 'uq_ticket_showtime_seat'
        assert await _count(uow_factory, 'tickets') == 1

    async def test_concurrent_sales_have_exactly_one_winner(
        self, uow_factory: UowFactory, catalog: Catalog
    ) -> None:
        guard = RacingGuard(parties=2)
        showtime, seat = catalog.showtimes[0], catalog.seats[4]

        results = await asyncio.gather(
            *(
                CreateTicketUseCase(uow=uow_factory(), guard=guard).create_ticket(
                    showtime_id=showtime.id, seat_id=seat.id, customer_id=customer.id
                )
                for customer in (catalog.jane, catalog.john)
            ),
            return_exceptions=True,
        )

        sold = [r for r in results if isinstance(r, Ticket)]
        rejected = [r for r in results if isinstance(r, SeatAlreadyReservedError)]
        assert len(sold) == 1
        assert len(rejected) == 1
        assert isinstance(rejected[0].__cause__, ConstraintViolationError)
        assert await _count(uow_factory, 'tickets') == 1


@pytest.mark.integration
class TestLostUpdate:
    @pytest.fixture
    async def ticket(
        self, uow_factory: UowFactory, guard: ReservationGuard, catalog: Catalog
    ) -> Ticket:
        return await CreateTicketUseCase(uow=uow_factory(), guard=guard).create_ticket(
            showtime_id=catalog.showtimes[0].id,
            seat_id=catalog.seats[0].id,
            customer_id=catalog.jane.id,
        )

    async def test_update_of_ticket_deleted_before_commit_conflicts(
        self,
        database: Any,
        uow_factory: UowFactory,
        guard: ReservationGuard,
        catalog: Catalog,
        ticket: Ticket,
    ) -> None:
        async def delete_ticket_elsewhere() -> None:
            await DeleteEntityUseCase(uow=uow_factory(), guard=guard).delete_ticket(
                ticket_id=ticket.id
            )

        uow = InterferingUnitOfWork(database.session_factory, interference=delete_ticket_elsewhere)

        with pytest.raises(ConcurrencyConflictError):
            await UpdateTicketUseCase(uow=uow, guard=guard).update_ticket(
                ticket_id=ticket.id,
                showtime_id=catalog.showtimes[0].id,
                seat_id=catalog.seats[1].id,
                customer_id=catalog.jane.id,
            )

        # Not resurrected, not silently ignored
        assert await _count(uow_factory, 'tickets') == 0

    async def test_update_of_ticket_changed_before_commit_conflicts(
        self,
        database: Any,
        uow_factory: UowFactory,
        guard: ReservationGuard,
        catalog: Catalog,
        ticket: Ticket,
    ) -> None:
        async def reassign_ticket_elsewhere() -> None:
            await UpdateTicketUseCase(uow=uow_factory(), guard=guard).update_ticket(
                ticket_id=ticket.id,
                showtime_id=catalog.showtimes[0].id,
                seat_id=catalog.seats[0].id,
                customer_id=catalog.john.id,
            )

        uow = InterferingUnitOfWork(
            database.session_factory, interference=reassign_ticket_elsewhere
        )

        with pytest.raises(ConcurrencyConflictError):
            await UpdateTicketUseCase(uow=uow, guard=guard).update_ticket(
                ticket_id=ticket.id,
                showtime_id=catalog.showtimes[0].id,
                seat_id=catalog.seats[2].id,
                customer_id=catalog.jane.id,
            )

        async with uow_factory() as check:
            stored = await check.tickets.no_tracking().get_by_id(ticket.id)
        assert stored is not None
        assert stored.customer_id == catalog.john.id
        assert stored.seat_id == catalog.seats[0].id
        assert stored.version_id == 2

    async def test_delete_of_ticket_deleted_before_commit_conflicts(
        self,
        database: Any,
        uow_factory: UowFactory,
        guard: ReservationGuard,
        ticket: Ticket,
    ) -> None:
        async def delete_ticket_elsewhere() -> None:
            await DeleteEntityUseCase(uow=uow_factory(), guard=guard).delete_ticket(
                ticket_id=ticket.id
            )

        uow = InterferingUnitOfWork(database.session_factory, interference=delete_ticket_elsewhere)

        with pytest.raises(ConcurrencyConflictError):
            await DeleteEntityUseCase(uow=uow, guard=guard).delete_ticket(ticket_id=ticket.id)

    async def test_unchanged_update_of_ticket_deleted_before_commit_conflicts(
        self,
        database: Any,
        uow_factory: UowFactory,
        guard: ReservationGuard,
        ticket: Ticket,
    ) -> None:
        async def delete_ticket_elsewhere() -> None:
            await DeleteEntityUseCase(uow=uow_factory(), guard=guard).delete_ticket(
                ticket_id=ticket.id
            )

        uow = InterferingUnitOfWork(database.session_factory, interference=delete_ticket_elsewhere)

        # Same showtime/seat/customer: no column changes, the version check still runs
        with pytest.raises(ConcurrencyConflictError):
            await UpdateTicketUseCase(uow=uow, guard=guard).update_ticket(
                ticket_id=ticket.id,
                showtime_id=ticket.showtime_id,
                seat_id=ticket.seat_id,
                customer_id=ticket.customer_id,
            )

        assert await _count(uow_factory, 'tickets') == 0

    async def test_unchanged_update_of_customer_deleted_before_commit_conflicts(
        self,
        database: Any,
        uow_factory: UowFactory,
        guard: ReservationGuard,
        catalog: Catalog,
    ) -> None:
        async def delete_customer_elsewhere() -> None:
            await DeleteEntityUseCase(uow=uow_factory(), guard=guard).delete_customer(
                customer_id=catalog.jane.id
            )

        uow = InterferingUnitOfWork(
            database.session_factory, interference=delete_customer_elsewhere
        )

        with pytest.raises(ConcurrencyConflictError):
            await UpdateCustomerUseCase(uow=uow, guard=guard).update_customer(
                customer_id=catalog.jane.id, full_name=catalog.jane.full_name
            )

        async with uow_factory() as check:
            assert await check.customers.no_tracking().get_by_id(catalog.jane.id) is None

    async def test_unchanged_update_bumps_version(
        self, uow_factory: UowFactory, guard: ReservationGuard, ticket: Ticket
    ) -> None:
        updated = await UpdateTicketUseCase(uow=uow_factory(), guard=guard).update_ticket(
            ticket_id=ticket.id,
            showtime_id=ticket.showtime_id,
            seat_id=ticket.seat_id,
            customer_id=ticket.customer_id,
        )

        assert updated.version_id == ticket.version_id + 1
