"""
Unit tests for ReservationGuard

Pre-checks fail fast on snapshot reads; `promoting()` turns a storage constraint
violation into the same domain error the pre-check raises.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    ConstraintViolationError,
    NotFoundError,
)
from src.service.cinema.app.reservation_guard import ReservationGuard
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


@pytest.fixture
def guard() -> ReservationGuard:
    return ReservationGuard()


@pytest.mark.unit
class TestPreChecks:
    async def test_ensure_exists_returns_entity(
        self, guard: ReservationGuard, mock_uow: MagicMock
    ) -> None:
        hall = Hall(name='Hall A', capacity=10, id=1, version_id=1)
        mock_uow.halls.get_by_id.return_value = hall

        result = await guard.ensure_exists(mock_uow.halls, 1, 'Hall')

        assert result is hall
        mock_uow.halls.no_tracking.assert_called_once()

    async def test_ensure_exists_raises_not_found(
        self, guard: ReservationGuard, mock_uow: MagicMock
    ) -> None:
        mock_uow.showtimes.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await guard.ensure_exists(mock_uow.showtimes, 99, 'Showtime')

        assert exc_info.value.message == 'Showtime not found'

    async def test_sold_seat_is_rejected(self, guard: ReservationGuard, mock_uow: MagicMock) -> None:
        mock_uow.tickets.any.return_value = True
        ticket = Ticket(showtime_id=1, seat_id=5, customer_id=2)

        with pytest.raises(SeatAlreadyReservedError):
            await guard.check_ticket(mock_uow, ticket)

        mock_uow.tickets.any.assert_awaited_once_with(showtime_id=1, seat_id=5, exclude_id=None)

    async def test_ticket_update_excludes_itself(
        self, guard: ReservationGuard, mock_uow: MagicMock
    ) -> None:
        ticket = Ticket(showtime_id=1, seat_id=5, customer_id=2, id=7, version_id=1)

        await guard.check_ticket(mock_uow, ticket)

        mock_uow.tickets.any.assert_awaited_once_with(showtime_id=1, seat_id=5, exclude_id=7)

    async def test_duplicate_phone_reported_before_email(
        self, guard: ReservationGuard, mock_uow: MagicMock
    ) -> None:
        mock_uow.customers.any.return_value = True
        customer = Customer(full_name='John', phone='+971501234567', email='john@x.io')

        with pytest.raises(DuplicateContactError) as exc_info:
            await guard.check_customer(mock_uow, customer)

        assert exc_info.value.field == 'phone'
        assert exc_info.value.message == 'Phone is already used'

    async def test_customer_without_contacts_skips_queries(
        self, guard: ReservationGuard, mock_uow: MagicMock
    ) -> None:
        await guard.check_customer(mock_uow, Customer(full_name='Walk-in'))

        mock_uow.customers.any.assert_not_awaited()

    async def test_hall_name_compared_by_key(
        self, guard: ReservationGuard, mock_uow: MagicMock
    ) -> None:
        mock_uow.halls.any.return_value = True

        with pytest.raises(DuplicateHallNameError):
            await guard.check_hall(mock_uow, Hall(name='HALL a', capacity=10))

        mock_uow.halls.any.assert_awaited_once_with(name_key='hall a', exclude_id=None)

    async def test_duplicate_seat_and_movie(
        self, guard: ReservationGuard, mock_uow: MagicMock
    ) -> None:
        mock_uow.seats.any.return_value = True
        mock_uow.movies.any.return_value = True

        with pytest.raises(DuplicateSeatError):
            await guard.check_seat(mock_uow, Seat(hall_id=1, row='A', number=1))
        with pytest.raises(DuplicateMovieTitleError):
            await guard.check_movie(
                mock_uow, Movie(title='Dune', duration_minutes=155, release_date=date(2021, 10, 22))
            )


@pytest.mark.unit
class TestPromotion:
    @pytest.mark.parametrize(
        ('constraint', 'expected'),
        [
            ('uq_ticket_showtime_seat', SeatAlreadyReservedError),
            ('uq_customer_phone', DuplicateContactError),
            ('uq_customer_email', DuplicateContactError),
            ('uq_hall_name_key', DuplicateHallNameError),
            ('uq_seat_hall_row_number', DuplicateSeatError),
            ('uq_movie_title_key', DuplicateMovieTitleError),
        ],
    )
    def test_known_constraints_map_to_domain_errors(
        self, guard: ReservationGuard, constraint: str, expected: type
    ) -> None:
        error = guard.promote(ConstraintViolationError(constraint))

        assert isinstance(error, expected)
        assert error.status_code == 409

    def test_email_constraint_names_the_field(self, guard: ReservationGuard) -> None:
        error = guard.promote(ConstraintViolationError('uq_customer_email'))

        assert isinstance(error, DuplicateContactError)
        assert error.field == 'email'

    def test_foreign_key_violation_is_not_found(self, guard: ReservationGuard) -> None:
        error = guard.promote(ConstraintViolationError(None, foreign_key=True))

        assert isinstance(error, NotFoundError)

    def test_unmapped_constraint_is_generic_conflict(self, guard: ReservationGuard) -> None:
        error = guard.promote(ConstraintViolationError('ck_hall_capacity_positive'))

        assert type(error) is ConflictError

    def test_promoting_chains_the_violation(self, guard: ReservationGuard) -> None:
        violation = ConstraintViolationError('uq_ticket_showtime_seat')

        with pytest.raises(SeatAlreadyReservedError) as exc_info:
            with guard.promoting():
                raise violation

        assert exc_info.value.__cause__ is violation

    def test_promoting_leaves_other_errors_alone(self, guard: ReservationGuard) -> None:
        with pytest.raises(ValueError):
            with guard.promoting():
                raise ValueError('boom')
