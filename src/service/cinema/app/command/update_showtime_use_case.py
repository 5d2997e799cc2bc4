from datetime import datetime
from decimal import Decimal
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
from src.service.cinema.domain.entity.showtime_entity import Showtime


class UpdateShowtimeUseCase:
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
    async def update_showtime(
        self,
        *,
        showtime_id: int,
        movie_id: int,
        hall_id: int,
        starts_at: datetime,
        price: Decimal,
    ) -> Showtime:
        with (
            self.tracer.start_as_current_span(
                'use_case.update_showtime', attributes={'showtime.id': showtime_id}
            ),
            track_write(entity='showtime', operation='update'),
        ):
            async with self.uow:
                existing = await self.uow.showtimes.get_by_id(showtime_id)
                if existing is None:
                    raise NotFoundError('Showtime not found')

                await self.guard.ensure_exists(self.uow.movies, movie_id, 'Movie')
                await self.guard.ensure_exists(self.uow.halls, hall_id, 'Hall')

                showtime = attrs.evolve(
                    Showtime.create(
                        movie_id=movie_id, hall_id=hall_id, starts_at=starts_at, price=price
                    ),
                    id=existing.id,
                    version_id=existing.version_id,
                )

                with self.guard.promoting():
                    await self.uow.showtimes.update(showtime)
                    await self.uow.commit()

                updated = await self.uow.showtimes.get_by_id(showtime_id)

            if updated is None:
                raise ConcurrencyConflictError()
            return updated
