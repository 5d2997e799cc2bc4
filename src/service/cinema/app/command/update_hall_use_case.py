from typing import Optional, Self

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
from src.service.cinema.domain.entity.hall_entity import Hall


class UpdateHallUseCase:
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
    async def update_hall(
        self, *, hall_id: int, name: Optional[str] = None, capacity: Optional[int] = None
    ) -> Hall:
        with (
            self.tracer.start_as_current_span('use_case.update_hall', attributes={'hall.id': hall_id}),
            track_write(entity='hall', operation='update'),
        ):
            async with self.uow:
                hall = await self.uow.halls.get_by_id(hall_id)
                if hall is None:
                    raise NotFoundError('Hall not found')

                hall.apply_changes(name=name, capacity=capacity)
                await self.guard.check_hall(self.uow, hall)

                with self.guard.promoting():
                    await self.uow.halls.update(hall)
                    await self.uow.commit()

                updated = await self.uow.halls.get_by_id(hall_id)

            if updated is None:
                raise ConcurrencyConflictError()
            return updated

    @Logger.io
    async def update_hall_by_name(
        self, *, name: str, new_name: Optional[str] = None, capacity: Optional[int] = None
    ) -> Hall:
        async with self.uow:
            hall = await self.uow.halls.no_tracking().find(name_key=name_key(name))
        if hall is None or hall.id is None:
            raise NotFoundError(f'No hall found with the name {name!r}')
        return await self.update_hall(hall_id=hall.id, name=new_name, capacity=capacity)
