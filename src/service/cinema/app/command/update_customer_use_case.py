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
from src.service.cinema.domain.contact_normalizer import normalize_email, normalize_phone
from src.service.cinema.domain.entity.customer_entity import Customer


class UpdateCustomerUseCase:
    """Partial update: `None` keeps a field, a blank phone/email clears it."""

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
    async def update_customer(
        self,
        *,
        customer_id: int,
        full_name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Customer:
        with (
            self.tracer.start_as_current_span(
                'use_case.update_customer', attributes={'customer.id': customer_id}
            ),
            track_write(entity='customer', operation='update'),
        ):
            async with self.uow:
                customer = await self.uow.customers.get_by_id(customer_id)
                if customer is None:
                    raise NotFoundError('Customer not found')

                customer.apply_changes(full_name=full_name, phone=phone, email=email)
                await self.guard.check_customer(self.uow, customer)

                with self.guard.promoting():
                    await self.uow.customers.update(customer)
                    await self.uow.commit()

                updated = await self.uow.customers.get_by_id(customer_id)

            if updated is None:
                raise ConcurrencyConflictError()
            return updated

    @Logger.io
    async def update_customer_by_email(
        self,
        *,
        email: str,
        full_name: Optional[str] = None,
        phone: Optional[str] = None,
        new_email: Optional[str] = None,
    ) -> Customer:
        """Resolve the customer by canonical email, then update it like `update_customer`."""
        async with self.uow:
            customer = await self.uow.customers.no_tracking().find(email=normalize_email(email))
        if customer is None or customer.id is None:
            raise NotFoundError('Customer not found')
        return await self.update_customer(
            customer_id=customer.id, full_name=full_name, phone=phone, email=new_email
        )

    @Logger.io
    async def update_customer_by_phone(
        self,
        *,
        phone: str,
        full_name: Optional[str] = None,
        new_phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Customer:
        canonical = normalize_phone(phone)
        async with self.uow:
            customer = await self.uow.customers.no_tracking().find(phone=canonical)
        if customer is None or customer.id is None:
            raise NotFoundError('Customer not found')
        return await self.update_customer(
            customer_id=customer.id, full_name=full_name, phone=new_phone, email=email
        )
