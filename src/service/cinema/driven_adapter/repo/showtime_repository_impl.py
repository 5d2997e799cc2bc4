from typing import Any, List

from sqlalchemy import func, select

from src.service.cinema.app.dto.listing_dto import NO_HALL, NO_MOVIE, ShowtimeListing
from src.service.cinema.app.interface.i_repository import IShowtimeRepository
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.driven_adapter.model.hall_model import HallModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.repo.sqlalchemy_repository import SqlAlchemyRepository


class ShowtimeRepositoryImpl(SqlAlchemyRepository[ShowtimeModel, Showtime], IShowtimeRepository):
    model = ShowtimeModel

    def _to_entity(self, row: Any) -> Showtime:
        return Showtime(
            id=row.id,
            movie_id=row.movie_id,
            hall_id=row.hall_id,
            starts_at=row.starts_at,
            price=row.price,
            version_id=row.version_id,
        )

    def _to_values(self, entity: Showtime) -> dict[str, Any]:
        return {
            'movie_id': entity.movie_id,
            'hall_id': entity.hall_id,
            'starts_at': entity.starts_at,
            'price': entity.price,
        }

    async def list_with_details(self) -> List[ShowtimeListing]:
        stmt = (
            select(
                ShowtimeModel.id,
                ShowtimeModel.movie_id,
                func.coalesce(MovieModel.title, NO_MOVIE).label('movie_title'),
                ShowtimeModel.hall_id,
                func.coalesce(HallModel.name, NO_HALL).label('hall_name'),
                ShowtimeModel.starts_at,
                ShowtimeModel.price,
            )
            .outerjoin(MovieModel, MovieModel.id == ShowtimeModel.movie_id)
            .outerjoin(HallModel, HallModel.id == ShowtimeModel.hall_id)
            .order_by(ShowtimeModel.starts_at, ShowtimeModel.id)
        )
        with self.session.sync_session.no_autoflush:
            rows = (await self.session.execute(stmt)).all()
        return [
            ShowtimeListing(
                id=row.id,
                movie_id=row.movie_id,
                movie_title=row.movie_title,
                hall_id=row.hall_id,
                hall_name=row.hall_name,
                starts_at=row.starts_at,
                price=row.price,
            )
            for row in rows
        ]
