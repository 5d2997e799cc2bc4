from datetime import date
from typing import Any, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConcurrencyConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.write_tracking import track_write
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.domain.contact_normalizer import name_key
from src.service.cinema.domain.entity.movie_entity import Movie


PATCHABLE_FIELDS = frozenset({'title', 'genre', 'duration_minutes', 'release_date'})


class UpdateMovieUseCase:
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
    async def update_movie(
        self,
        *,
        movie_id: int,
        title: str,
        duration_minutes: int,
        release_date: date,
        genre: Optional[str] = None,
    ) -> Movie:
        return await self._save(
            movie_id,
            title=title,
            duration_minutes=duration_minutes,
            release_date=release_date,
            genre=genre,
        )

    @Logger.io
    async def patch_movie(self, *, movie_id: int, **changes: Any) -> Movie:
        """
        Change only the given fields; the rest keep their stored values.

        An explicit `genre=None` clears the genre.
        """
        unknown = set(changes) - PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f'Unknown movie fields: {", ".join(sorted(unknown))}')
        return await self._save(movie_id, **changes)

    @Logger.io
    async def update_movie_by_title(
        self,
        *,
        title: str,
        duration_minutes: int,
        release_date: date,
        genre: Optional[str] = None,
    ) -> Movie:
        """Replace the details of the movie with this title (case-insensitive); the title stays."""
        async with self.uow:
            movie = await self.uow.movies.no_tracking().find(title_key=name_key(title))
        if movie is None or movie.id is None:
            raise NotFoundError(f'No movie found with the title {title!r}')

        return await self._save(
            movie.id, duration_minutes=duration_minutes, release_date=release_date, genre=genre
        )

    async def _save(self, movie_id: int, **changes: Any) -> Movie:
        with (
            self.tracer.start_as_current_span(
                'use_case.update_movie', attributes={'movie.id': movie_id}
            ),
            track_write(entity='movie', operation='update'),
        ):
            async with self.uow:
                existing = await self.uow.movies.get_by_id(movie_id)
                if existing is None:
                    raise NotFoundError('Movie not found')

                values = {
                    'title': existing.title,
                    'duration_minutes': existing.duration_minutes,
                    'release_date': existing.release_date,
                    'genre': existing.genre,
                } | changes
                movie = attrs.evolve(
                    Movie.create(**values), id=existing.id, version_id=existing.version_id
                )
                await self.guard.check_movie(self.uow, movie)

                with self.guard.promoting():
                    await self.uow.movies.update(movie)
                    await self.uow.commit()

                updated = await self.uow.movies.get_by_id(movie_id)

            if updated is None:
                raise ConcurrencyConflictError()
            return updated
