from typing import Any

from src.service.cinema.app.interface.i_repository import IMovieRepository
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.repo.sqlalchemy_repository import SqlAlchemyRepository


class MovieRepositoryImpl(SqlAlchemyRepository[MovieModel, Movie], IMovieRepository):
    model = MovieModel

    def _to_entity(self, row: Any) -> Movie:
        return Movie(
            id=row.id,
            title=row.title,
            genre=row.genre,
            duration_minutes=row.duration_minutes,
            release_date=row.release_date,
            version_id=row.version_id,
        )

    def _to_values(self, entity: Movie) -> dict[str, Any]:
        return {
            'title': entity.title,
            'title_key': entity.title_key,
            'genre': entity.genre,
            'duration_minutes': entity.duration_minutes,
            'release_date': entity.release_date,
        }
