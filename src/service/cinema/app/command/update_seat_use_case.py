from typing import Self

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
from src.service.cinema.domain.entity.seat_entity import Seat


class UpdateSeatUseCase:
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
    async def update_seat(self, *, seat_id: int, hall_id: int, row: str, number: int) -> Seat:
        with (
            self.tracer.start_as_current_span('use_case.update_seat', attributes={'seat.id': seat_id}),
            track_write(entity='seat', operation='update'),
        ):
            async with self.uow:
                existing = await self.uow.seats.get_by_id(seat_id)
                if existing is None:
                    raise NotFoundError('Seat not found')
                await self.guard.ensure_exists(self.uow.halls, hall_id, 'Hall')

                # Same canonical row as on create
                seat = attrs.evolve(
                    Seat.create(hall_id=hall_id, row=row, number=number),
                    id=existing.id,
                    version_id=existing.version_id,
                )
                await self.guard.check_seat(self.uow, seat)

                with self.guard.promoting():
                    await self.uow.seats.update(seat)
                    await self.uow.commit()

                updated = await self.uow.seats.get_by_id(seat_id)

            if updated is None:
                raise ConcurrencyConflictError()
            return updated
