"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.cinema.driven_adapter.model.customer_model import CustomerModel
from src.service.cinema.driven_adapter.model.hall_model import HallModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.model.ticket_model import TicketModel

__all__ = [
    'CustomerModel',
    'HallModel',
    'MovieModel',
    'SeatModel',
    'ShowtimeModel',
    'TicketModel',
]
