from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

from src.service.cinema.app.dto.listing_dto import SeatListing, ShowtimeListing, TicketListing
from src.service.cinema.domain.entity.customer_entity import Customer
from src.service.cinema.domain.entity.hall_entity import Hall
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.seat_entity import Seat
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.ticket_entity import Ticket


T = TypeVar('T')


class IRepository(ABC, Generic[T]):
    """
    Generic per-entity repository bound to one Unit of Work session.

    Reads come in two flavours: the default tracked mode goes through the session
    (identity map, autoflush) and `no_tracking()` returns a snapshot view that reads the
    table directly and hands back disconnected copies. Writes are staged and only become
    durable on `uow.commit()`.
    """

    @abstractmethod
    def no_tracking(self) -> 'IRepository[T]':
        pass

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[T]:
        pass

    @abstractmethod
    async def find(self, **criteria: Any) -> Optional[T]:
        pass

    @abstractmethod
    async def find_all(self, **criteria: Any) -> List[T]:
        pass

    @abstractmethod
    async def get_all(self) -> List[T]:
        pass

    @abstractmethod
    async def any(self, *, exclude_id: Optional[int] = None, **criteria: Any) -> bool:
        pass

    @abstractmethod
    async def add(self, entity: T) -> T:
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        pass

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        pass


class ICustomerRepository(IRepository[Customer]):
    @abstractmethod
    async def find_by_name(self, name: str) -> List[Customer]:
        """Customers whose full name contains `name` (case-insensitive)"""


class IHallRepository(IRepository[Hall]):
    pass


class ISeatRepository(IRepository[Seat]):
    @abstractmethod
    async def list_with_hall(self) -> List[SeatListing]:
        pass


class IMovieRepository(IRepository[Movie]):
    pass


class IShowtimeRepository(IRepository[Showtime]):
    @abstractmethod
    async def list_with_details(self) -> List[ShowtimeListing]:
        pass


class ITicketRepository(IRepository[Ticket]):
    @abstractmethod
    async def list_with_details(self) -> List[TicketListing]:
        pass
