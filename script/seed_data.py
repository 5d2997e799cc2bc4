#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the cinema database

Features:
1. Create Halls & Seats - each hall gets a rectangular seating plan
2. Create Movies & Showtimes - one week of evening screenings
3. Create Customers - a few box-office regulars

Notes:
- Run `python script/reset_database.py` first; the seed refuses to run twice because
  hall names, movie titles and customer contacts are unique
- Seat plan size comes from the SEAT_ROWS / SEATS_PER_ROW environment variables
"""

import asyncio
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
import os
from string import ascii_uppercase

from src.platform.config.di import container
from src.platform.database.orm_db_setting import create_db_and_tables
from src.service.cinema.app.command.create_customer_use_case import CreateCustomerUseCase
from src.service.cinema.app.command.create_hall_use_case import CreateHallUseCase
from src.service.cinema.app.command.create_movie_use_case import CreateMovieUseCase
from src.service.cinema.app.command.create_seat_use_case import CreateSeatUseCase
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase


HALLS = ['Hall A', 'Hall B']
MOVIES = [
    ('Dune', 'Sci-Fi', 155, date(2021, 10, 22)),
    ('The Long Night', 'Drama', 128, date(2025, 3, 14)),
]
CUSTOMERS = [
    ('Layla Hassan', '050 123 4567', 'layla@example.com'),
    ('Omar Khalid', '055 987 6543', None),
    ('Sara Ahmed', None, 'sara@example.com'),
]
SHOW_HOURS = [time(17, 0), time(20, 30)]
TICKET_PRICE = Decimal('45.00')


def _seating_plan() -> tuple[int, int]:
    rows = int(os.getenv('SEAT_ROWS', '5'))
    per_row = int(os.getenv('SEATS_PER_ROW', '10'))
    return min(rows, len(ascii_uppercase)), per_row


def _use_case(use_case_class):
    return use_case_class(uow=container.unit_of_work(), guard=container.reservation_guard())


async def create_halls_and_seats() -> list[int]:
    rows, per_row = _seating_plan()
    print(f'🏛️ Creating {len(HALLS)} halls ({rows} x {per_row} seats each)...')

    hall_ids = []
    for name in HALLS:
        hall = await _use_case(CreateHallUseCase).create_hall(name=name, capacity=rows * per_row)
        for row in ascii_uppercase[:rows]:
            for number in range(1, per_row + 1):
                await _use_case(CreateSeatUseCase).create_seat(
                    hall_id=hall.id, row=row, number=number
                )
        print(f'   ✅ Created hall: ID={hall.id}, Name={hall.name}')
        hall_ids.append(hall.id)
    return hall_ids


async def create_movies_and_showtimes(hall_ids: list[int], days: int = 7) -> None:
    print(f'🎬 Creating {len(MOVIES)} movies...')

    movie_ids = []
    for title, genre, duration, release_date in MOVIES:
        movie = await _use_case(CreateMovieUseCase).create_movie(
            title=title, genre=genre, duration_minutes=duration, release_date=release_date
        )
        print(f'   ✅ Created movie: ID={movie.id}, Title={movie.title}')
        movie_ids.append(movie.id)

    first_day = datetime.now(timezone.utc).date() + timedelta(days=1)
    count = 0
    for offset in range(days):
        day = first_day + timedelta(days=offset)
        for hall_id, movie_id in zip(hall_ids, movie_ids):
            for hour in SHOW_HOURS:
                await _use_case(CreateShowtimeUseCase).create_showtime(
                    movie_id=movie_id,
                    hall_id=hall_id,
                    starts_at=datetime.combine(day, hour, tzinfo=timezone.utc),
                    price=TICKET_PRICE,
                )
                count += 1
    print(f'   ✅ Created showtimes: {count}')


async def create_customers() -> None:
    print(f'👥 Creating {len(CUSTOMERS)} customers...')

    for full_name, phone, email in CUSTOMERS:
        customer = await _use_case(CreateCustomerUseCase).create_customer(
            full_name=full_name, phone=phone, email=email
        )
        print(f'   ✅ Created customer: ID={customer.id}, Phone={customer.phone}')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    database = container.database()
    try:
        await create_db_and_tables(database.engine)
        hall_ids = await create_halls_and_seats()
        print()
        await create_movies_and_showtimes(hall_ids)
        print()
        await create_customers()
    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1) from e
    finally:
        await database.dispose()

    print('=' * 50)
    print('🌱 Data seeding completed!')


if __name__ == '__main__':
    asyncio.run(main())
