from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.write_tracking import track_write
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.domain.entity.seat_entity import Seat


class CreateSeatUseCase:
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
    async def create_seat(self, *, hall_id: int, row: str, number: int) -> Seat:
        with (
            self.tracer.start_as_current_span('use_case.create_seat', attributes={'hall.id': hall_id}),
            track_write(entity='seat', operation='create'),
        ):
            seat = Seat.create(hall_id=hall_id, row=row, number=number)

            async with self.uow:
                await self.guard.ensure_exists(self.uow.halls, hall_id, 'Hall')
                await self.guard.check_seat(self.uow, seat)

                with self.guard.promoting():
                    created = await self.uow.seats.add(seat)
                    await self.uow.commit()

            return created
