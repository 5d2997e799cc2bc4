"""
Hard deletes for every cinema entity

Dependent rows go with their parent through ON DELETE CASCADE (a hall takes its seats
and showtimes, a showtime/seat/customer takes its tickets).
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.write_tracking import track_write
from src.service.cinema.app.interface.i_repository import IRepository
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.domain.contact_normalizer import (
    name_key,
    normalize_email,
    normalize_phone,
)


class DeleteEntityUseCase:
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

    async def _delete(self, *, entity: str, label: str, entity_id: int) -> None:
        with (
            self.tracer.start_as_current_span(
                f'use_case.delete_{entity}', attributes={f'{entity}.id': entity_id}
            ),
            track_write(entity=entity, operation='delete'),
        ):
            async with self.uow:
                repo: IRepository = getattr(self.uow, f'{entity}s')
                if not await repo.delete(entity_id):
                    raise NotFoundError(f'{label} not found')

                with self.guard.promoting():
                    await self.uow.commit()

        Logger.base.info(f'🗑️ [DELETE] {label} {entity_id} deleted')

    @Logger.io
    async def delete_customer(self, *, customer_id: int) -> None:
        await self._delete(entity='customer', label='Customer', entity_id=customer_id)

    @Logger.io
    async def delete_hall(self, *, hall_id: int) -> None:
        await self._delete(entity='hall', label='Hall', entity_id=hall_id)

    @Logger.io
    async def delete_seat(self, *, seat_id: int) -> None:
        await self._delete(entity='seat', label='Seat', entity_id=seat_id)

    @Logger.io
    async def delete_movie(self, *, movie_id: int) -> None:
        await self._delete(entity='movie', label='Movie', entity_id=movie_id)

    @Logger.io
    async def delete_showtime(self, *, showtime_id: int) -> None:
        await self._delete(entity='showtime', label='Showtime', entity_id=showtime_id)

    @Logger.io
    async def delete_ticket(self, *, ticket_id: int) -> None:
        await self._delete(entity='ticket', label='Ticket', entity_id=ticket_id)

    @Logger.io
    async def delete_customer_by_email(self, *, email: str) -> None:
        async with self.uow:
            customer = await self.uow.customers.no_tracking().find(email=normalize_email(email))
        if customer is None or customer.id is None:
            raise NotFoundError('Customer not found')
        await self.delete_customer(customer_id=customer.id)

    @Logger.io
    async def delete_customer_by_phone(self, *, phone: str) -> None:
        canonical = normalize_phone(phone)
        async with self.uow:
            customer = await self.uow.customers.no_tracking().find(phone=canonical)
        if customer is None or customer.id is None:
            raise NotFoundError('Customer not found')
        await self.delete_customer(customer_id=customer.id)

    @Logger.io
    async def delete_hall_by_name(self, *, name: str) -> None:
        async with self.uow:
            hall = await self.uow.halls.no_tracking().find(name_key=name_key(name))
        if hall is None or hall.id is None:
            raise NotFoundError(f'No hall found with the name {name!r}')
        await self.delete_hall(hall_id=hall.id)

    @Logger.io
    async def delete_movie_by_title(self, *, title: str) -> None:
        async with self.uow:
            movie = await self.uow.movies.no_tracking().find(title_key=name_key(title))
        if movie is None or movie.id is None:
            raise NotFoundError(f'No movie found with the title {title!r}')
        await self.delete_movie(movie_id=movie.id)
