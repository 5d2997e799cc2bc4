from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.write_tracking import track_write
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.domain.entity.hall_entity import Hall


class CreateHallUseCase:
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
    async def create_hall(self, *, name: str, capacity: int) -> Hall:
        """Hall names are unique ignoring case ('Hall A' == 'hall a')."""
        with (
            self.tracer.start_as_current_span('use_case.create_hall'),
            track_write(entity='hall', operation='create'),
        ):
            hall = Hall.create(name=name, capacity=capacity)

            async with self.uow:
                await self.guard.check_hall(self.uow, hall)

                with self.guard.promoting():
                    created = await self.uow.halls.add(hall)
                    await self.uow.commit()

            return created
