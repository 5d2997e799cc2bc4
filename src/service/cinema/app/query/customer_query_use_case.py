from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.contact_normalizer import normalize_email, normalize_phone
from src.service.cinema.domain.entity.customer_entity import Customer


class CustomerQueryUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_customer(self, *, customer_id: int) -> Customer:
        async with self.uow:
            customer = await self.uow.customers.no_tracking().get_by_id(customer_id)
        if customer is None:
            raise NotFoundError('Customer not found')
        return customer

    @Logger.io
    async def list_customers(self) -> List[Customer]:
        async with self.uow:
            return await self.uow.customers.no_tracking().get_all()

    @Logger.io
    async def find_customer_by_phone(self, *, phone: str) -> Customer:
        """Lookup by canonical phone, so any accepted spelling of the number matches."""
        canonical = normalize_phone(phone)
        async with self.uow:
            customer = await self.uow.customers.no_tracking().find(phone=canonical)
        if customer is None:
            raise NotFoundError('Customer not found')
        return customer

    @Logger.io
    async def find_customer_by_email(self, *, email: str) -> Customer:
        async with self.uow:
            customer = await self.uow.customers.no_tracking().find(email=normalize_email(email))
        if customer is None:
            raise NotFoundError('Customer not found')
        return customer

    @Logger.io
    async def find_customers_by_name(self, *, name: str) -> List[Customer]:
        async with self.uow:
            return await self.uow.customers.no_tracking().find_by_name(name)
