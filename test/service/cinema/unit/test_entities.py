from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.entity.customer_entity import Customer
from src.service.cinema.domain.entity.hall_entity import Hall
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.seat_entity import Seat
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.ticket_entity import Ticket


@pytest.mark.unit
class TestCustomer:
    def test_create_stores_canonical_contacts(self) -> None:
        customer = Customer.create(
            full_name='  Jane Doe ', phone='050 123 4567', email=' Jane@Example.com'
        )

        assert customer.full_name == 'Jane Doe'
        assert customer.phone == '+971501234567'
        assert customer.email == 'jane@example.com'
        assert customer.id is None
        assert customer.version_id is None

    def test_create_requires_full_name(self) -> None:
        with pytest.raises(DomainError):
            Customer.create(full_name='   ')

    def test_apply_changes_keeps_omitted_fields(self) -> None:
        customer = Customer.create(full_name='Jane', phone='0501234567', email='jane@x.io')

        customer.apply_changes(full_name='Jane Doe')

        assert customer.full_name == 'Jane Doe'
        assert customer.phone == '+971501234567'
        assert customer.email == 'jane@x.io'

    def test_apply_changes_blank_clears_contact(self) -> None:
        customer = Customer.create(full_name='Jane', phone='0501234567', email='jane@x.io')

        customer.apply_changes(phone='', email='')

        assert customer.phone is None
        assert customer.email is None


@pytest.mark.unit
class TestHall:
    def test_name_key_is_case_insensitive(self) -> None:
        assert Hall.create(name=' Hall A ', capacity=100).name_key == 'hall a'

    @pytest.mark.parametrize('capacity', [0, -5])
    def test_capacity_must_be_positive(self, capacity: int) -> None:
        with pytest.raises(DomainError):
            Hall.create(name='Hall A', capacity=capacity)

    def test_blank_name_rejected_on_update(self) -> None:
        hall = Hall.create(name='Hall A', capacity=100)

        with pytest.raises(DomainError):
            hall.apply_changes(name='  ')


@pytest.mark.unit
class TestSeatMovieShowtime:
    def test_seat_row_is_canonical(self) -> None:
        seat = Seat.create(hall_id=1, row=' c ', number=7)

        assert seat.row == 'C'
        assert seat.label == 'C-7'

    def test_seat_number_must_be_positive(self) -> None:
        with pytest.raises(DomainError):
            Seat.create(hall_id=1, row='A', number=0)

    def test_movie_title_key_and_blank_genre(self) -> None:
        movie = Movie.create(
            title=' Dune ', duration_minutes=155, release_date=date(2021, 10, 22), genre='  '
        )

        assert movie.title == 'Dune'
        assert movie.title_key == 'dune'
        assert movie.genre is None

    def test_showtime_price_is_quantized_to_cents(self) -> None:
        showtime = Showtime.create(
            movie_id=1,
            hall_id=1,
            starts_at=datetime(2026, 1, 1, 20, 0, tzinfo=timezone.utc),
            price=Decimal('12.5'),
        )

        assert showtime.price == Decimal('12.50')

    def test_showtime_price_cannot_be_negative(self) -> None:
        with pytest.raises(DomainError):
            Showtime.create(
                movie_id=1, hall_id=1, starts_at=datetime.now(timezone.utc), price=Decimal('-1')
            )

    def test_ticket_defaults_purchase_time(self) -> None:
        ticket = Ticket(showtime_id=1, seat_id=5, customer_id=1)

        assert ticket.purchased_at.tzinfo is not None
