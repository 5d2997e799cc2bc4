"""
Shared fixtures: a small seeded catalog in the per-test SQLite database.

    hall 'Hall A' (capacity 50) with seats A-1 .. A-6
    movie 'Dune', showtimes #1 and #2 in Hall A
    customers Jane Doe (+971501234567) and John Roe (no phone)
"""

from collections.abc import Callable
from datetime import date, datetime, timezone
from decimal import Decimal

import attrs
import pytest

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema.domain.entity.customer_entity import Customer
from src.service.cinema.domain.entity.hall_entity import Hall
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.seat_entity import Seat
from src.service.cinema.domain.entity.showtime_entity import Showtime


@attrs.define
class Catalog:
    hall: Hall
    seats: list[Seat]
    movie: Movie
    showtimes: list[Showtime]
    jane: Customer
    john: Customer


@pytest.fixture
async def catalog(uow_factory: Callable[[], SqlAlchemyUnitOfWork]) -> Catalog:
    async with uow_factory() as uow:
        hall = await uow.halls.add(Hall.create(name='Hall A', capacity=50))
        seats = [
            await uow.seats.add(Seat.create(hall_id=hall.id, row='A', number=number))
            for number in range(1, 7)
        ]
        movie = await uow.movies.add(
            Movie.create(title='Dune', duration_minutes=155, release_date=date(2021, 10, 22))
        )
        showtimes = [
            await uow.showtimes.add(
                Showtime.create(
                    movie_id=movie.id,
                    hall_id=hall.id,
                    starts_at=datetime(2026, 11, day, 20, 0, tzinfo=timezone.utc),
                    price=Decimal('45.00'),
                )
            )
            for day in (1, 2)
        ]
        jane = await uow.customers.add(Customer.create(full_name='Jane Doe', phone='0501234567'))
        john = await uow.customers.add(Customer.create(full_name='John Roe', email='john@x.io'))
        await uow.commit()

    return Catalog(
        hall=hall, seats=seats, movie=movie, showtimes=showtimes, jane=jane, john=john
    )
