from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.listing_dto import TicketListing
from src.service.cinema.domain.entity.ticket_entity import Ticket


class TicketQueryUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_ticket(self, *, ticket_id: int) -> Ticket:
        async with self.uow:
            ticket = await self.uow.tickets.no_tracking().get_by_id(ticket_id)
        if ticket is None:
            raise NotFoundError('Ticket not found')
        return ticket

    @Logger.io
    async def list_tickets(self) -> List[TicketListing]:
        async with self.uow:
            return await self.uow.tickets.list_with_details()
