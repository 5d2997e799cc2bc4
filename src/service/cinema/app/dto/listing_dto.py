"""Read models for listings joined with display names of related rows."""

from datetime import datetime
from decimal import Decimal

import attrs


NO_MOVIE = '(No movie)'
NO_HALL = '(No hall)'
NO_SEAT = '(No seat)'
NO_CUSTOMER = '(No customer)'


@attrs.define(frozen=True)
class SeatListing:
    id: int
    hall_id: int
    hall_name: str
    row: str
    number: int


@attrs.define(frozen=True)
class ShowtimeListing:
    id: int
    movie_id: int
    movie_title: str
    hall_id: int
    hall_name: str
    starts_at: datetime
    price: Decimal


@attrs.define(frozen=True)
class TicketListing:
    """
    One sold ticket with what a box-office screen shows next to it.

    Related rows are left-joined; a missing one is rendered with a placeholder
    label instead of dropping the ticket from the list.
    """

    id: int
    showtime_id: int
    seat_id: int
    customer_id: int
    purchased_at: datetime
    movie_title: str = NO_MOVIE
    hall_name: str = NO_HALL
    seat_label: str = NO_SEAT
    customer_name: str = NO_CUSTOMER
