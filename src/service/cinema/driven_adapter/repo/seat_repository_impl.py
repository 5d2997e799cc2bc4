from typing import Any, List

from sqlalchemy import func, select

from src.service.cinema.app.dto.listing_dto import NO_HALL, SeatListing
from src.service.cinema.app.interface.i_repository import ISeatRepository
from src.service.cinema.domain.entity.seat_entity import Seat
from src.service.cinema.driven_adapter.model.hall_model import HallModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel
from src.service.cinema.driven_adapter.repo.sqlalchemy_repository import SqlAlchemyRepository


class SeatRepositoryImpl(SqlAlchemyRepository[SeatModel, Seat], ISeatRepository):
    model = SeatModel

    def _to_entity(self, row: Any) -> Seat:
        return Seat(
            id=row.id,
            hall_id=row.hall_id,
            row=row.row,
            number=row.number,
            version_id=row.version_id,
        )

    def _to_values(self, entity: Seat) -> dict[str, Any]:
        return {'hall_id': entity.hall_id, 'row': entity.row, 'number': entity.number}

    async def list_with_hall(self) -> List[SeatListing]:
        stmt = (
            select(
                SeatModel.id,
                SeatModel.hall_id,
                func.coalesce(HallModel.name, NO_HALL).label('hall_name'),
                SeatModel.row,
                SeatModel.number,
            )
            .outerjoin(HallModel, HallModel.id == SeatModel.hall_id)
            .order_by(SeatModel.hall_id, SeatModel.row, SeatModel.number)
        )
        with self.session.sync_session.no_autoflush:
            rows = (await self.session.execute(stmt)).all()
        return [
            SeatListing(
                id=row.id,
                hall_id=row.hall_id,
                hall_name=row.hall_name,
                row=row.row,
                number=row.number,
            )
            for row in rows
        ]
