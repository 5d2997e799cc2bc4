from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.listing_dto import ShowtimeListing
from src.service.cinema.domain.entity.showtime_entity import Showtime


class ShowtimeQueryUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_showtime(self, *, showtime_id: int) -> Showtime:
        async with self.uow:
            showtime = await self.uow.showtimes.no_tracking().get_by_id(showtime_id)
        if showtime is None:
            raise NotFoundError('Showtime not found')
        return showtime

    @Logger.io
    async def list_showtimes(self) -> List[ShowtimeListing]:
        """Ordered by start time, with movie title and hall name."""
        async with self.uow:
            return await self.uow.showtimes.list_with_details()
