from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.contact_normalizer import name_key
from src.service.cinema.domain.entity.hall_entity import Hall


class HallQueryUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_hall(self, *, hall_id: int) -> Hall:
        async with self.uow:
            hall = await self.uow.halls.no_tracking().get_by_id(hall_id)
        if hall is None:
            raise NotFoundError('Hall not found')
        return hall

    @Logger.io
    async def list_halls(self) -> List[Hall]:
        async with self.uow:
            return await self.uow.halls.no_tracking().get_all()

    @Logger.io
    async def find_hall_by_name(self, *, name: str) -> Hall:
        async with self.uow:
            hall = await self.uow.halls.no_tracking().find(name_key=name_key(name))
        if hall is None:
            raise NotFoundError(f'No hall found with the name {name!r}')
        return hall
