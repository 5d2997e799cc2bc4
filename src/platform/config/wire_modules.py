"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.command import (
    create_customer_use_case,
    create_hall_use_case,
    create_movie_use_case,
    create_seat_use_case,
    create_showtime_use_case,
    create_ticket_use_case,
    delete_entity_use_case,
    update_customer_use_case,
    update_hall_use_case,
    update_movie_use_case,
    update_seat_use_case,
    update_showtime_use_case,
    update_ticket_use_case,
)
from src.service.cinema.app.query import (
    customer_query_use_case,
    hall_query_use_case,
    movie_query_use_case,
    seat_query_use_case,
    showtime_query_use_case,
    ticket_query_use_case,
)
from src.service.cinema.driving_adapter.http_controller.auth import principal_auth


WIRE_MODULES: list[ModuleType] = [
    create_customer_use_case,
    update_customer_use_case,
    create_hall_use_case,
    update_hall_use_case,
    create_seat_use_case,
    update_seat_use_case,
    create_movie_use_case,
    update_movie_use_case,
    create_showtime_use_case,
    update_showtime_use_case,
    create_ticket_use_case,
    update_ticket_use_case,
    delete_entity_use_case,
    customer_query_use_case,
    hall_query_use_case,
    seat_query_use_case,
    movie_query_use_case,
    showtime_query_use_case,
    ticket_query_use_case,
    principal_auth,
]
