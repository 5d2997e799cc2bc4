from typing import Any, List

from sqlalchemy import select

from src.service.cinema.app.dto.listing_dto import (
    NO_CUSTOMER,
    NO_HALL,
    NO_MOVIE,
    NO_SEAT,
    TicketListing,
)
from src.service.cinema.app.interface.i_repository import ITicketRepository
from src.service.cinema.domain.entity.ticket_entity import Ticket
from src.service.cinema.driven_adapter.model.customer_model import CustomerModel
from src.service.cinema.driven_adapter.model.hall_model import HallModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.model.ticket_model import TicketModel
from src.service.cinema.driven_adapter.repo.sqlalchemy_repository import SqlAlchemyRepository


class TicketRepositoryImpl(SqlAlchemyRepository[TicketModel, Ticket], ITicketRepository):
    model = TicketModel

    def _to_entity(self, row: Any) -> Ticket:
        return Ticket(
            id=row.id,
            showtime_id=row.showtime_id,
            seat_id=row.seat_id,
            customer_id=row.customer_id,
            purchased_at=row.purchased_at,
            version_id=row.version_id,
        )

    def _to_values(self, entity: Ticket) -> dict[str, Any]:
        return {
            'showtime_id': entity.showtime_id,
            'seat_id': entity.seat_id,
            'customer_id': entity.customer_id,
            'purchased_at': entity.purchased_at,
        }

    async def list_with_details(self) -> List[TicketListing]:
        stmt = (
            select(
                TicketModel.id,
                TicketModel.showtime_id,
                TicketModel.seat_id,
                TicketModel.customer_id,
                TicketModel.purchased_at,
                MovieModel.title.label('movie_title'),
                HallModel.name.label('hall_name'),
                SeatModel.row.label('seat_row'),
                SeatModel.number.label('seat_number'),
                CustomerModel.full_name.label('customer_name'),
            )
            .outerjoin(ShowtimeModel, ShowtimeModel.id == TicketModel.showtime_id)
            .outerjoin(MovieModel, MovieModel.id == ShowtimeModel.movie_id)
            .outerjoin(HallModel, HallModel.id == ShowtimeModel.hall_id)
            .outerjoin(SeatModel, SeatModel.id == TicketModel.seat_id)
            .outerjoin(CustomerModel, CustomerModel.id == TicketModel.customer_id)
            .order_by(TicketModel.id)
        )
        with self.session.sync_session.no_autoflush:
            rows = (await self.session.execute(stmt)).all()

        return [
            TicketListing(
                id=row.id,
                showtime_id=row.showtime_id,
                seat_id=row.seat_id,
                customer_id=row.customer_id,
                purchased_at=row.purchased_at,
                movie_title=row.movie_title or NO_MOVIE,
                hall_name=row.hall_name or NO_HALL,
                seat_label=(
                    f'{row.seat_row}-{row.seat_number}' if row.seat_row is not None else NO_SEAT
                ),
                customer_name=row.customer_name or NO_CUSTOMER,
            )
            for row in rows
        ]
