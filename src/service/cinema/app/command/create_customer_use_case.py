from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.write_tracking import track_write
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.domain.entity.customer_entity import Customer


class CreateCustomerUseCase:
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
    async def create_customer(
        self, *, full_name: str, phone: Optional[str] = None, email: Optional[str] = None
    ) -> Customer:
        """
        Register a customer under canonical contact details.

        Phone and email are normalized before the uniqueness checks, so
        '0501234567' and '+971 50 123 4567' collide as the same phone.

        Raises:
            InvalidPhoneError: phone is not a recognised mobile number
            DuplicateContactError: phone or email already belongs to another customer
        """
        with (
            self.tracer.start_as_current_span('use_case.create_customer'),
            track_write(entity='customer', operation='create'),
        ):
            customer = Customer.create(full_name=full_name, phone=phone, email=email)

            async with self.uow:
                await self.guard.check_customer(self.uow, customer)

                with self.guard.promoting():
                    created = await self.uow.customers.add(customer)
                    await self.uow.commit()

            return created
