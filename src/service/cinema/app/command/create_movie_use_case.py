from datetime import date
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.write_tracking import track_write
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.domain.entity.movie_entity import Movie


class CreateMovieUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, guard: ReservationGuard) -> None:
        self.uow = uow
        self.guard = guard
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        guard: ReservationGuard = Depends(Provide[Container.reservation_guard]),
    ) -> Self:
        return cls(uow=uow, guard=guard)

    @Logger.io
    async def create_movie(
        self,
        *,
        title: str,
        duration_minutes: int,
        release_date: date,
        genre: Optional[str] = None,
    ) -> Movie:
        with (
            self.tracer.start_as_current_span('use_case.create_movie'),
            track_write(entity='movie', operation='create'),
        ):
            movie = Movie.create(
                title=title,
                duration_minutes=duration_minutes,
                release_date=release_date,
                genre=genre,
            )

            async with self.uow:
                await self.guard.check_movie(self.uow, movie)

                with self.guard.promoting():
                    created = await self.uow.movies.add(movie)
                    await self.uow.commit()

            return created
