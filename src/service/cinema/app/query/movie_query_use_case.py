from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.contact_normalizer import name_key
from src.service.cinema.domain.entity.movie_entity import Movie


class MovieQueryUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_movie(self, *, movie_id: int) -> Movie:
        async with self.uow:
            movie = await self.uow.movies.no_tracking().get_by_id(movie_id)
        if movie is None:
            raise NotFoundError('Movie not found')
        return movie

    @Logger.io
    async def list_movies(self) -> List[Movie]:
        async with self.uow:
            return await self.uow.movies.no_tracking().get_all()

    @Logger.io
    async def find_movie_by_title(self, *, title: str) -> Movie:
        async with self.uow:
            movie = await self.uow.movies.no_tracking().find(title_key=name_key(title))
        if movie is None:
            raise NotFoundError(f'No movie found with the title {title!r}')
        return movie
