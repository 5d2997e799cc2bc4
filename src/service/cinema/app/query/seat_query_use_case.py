from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.listing_dto import SeatListing
from src.service.cinema.domain.entity.seat_entity import Seat


class SeatQueryUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_seat(self, *, seat_id: int) -> Seat:
        async with self.uow:
            seat = await self.uow.seats.no_tracking().get_by_id(seat_id)
        if seat is None:
            raise NotFoundError('Seat not found')
        return seat

    @Logger.io
    async def list_seats(self) -> List[SeatListing]:
        async with self.uow:
            return await self.uow.seats.list_with_hall()
