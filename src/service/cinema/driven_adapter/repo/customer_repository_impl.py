from typing import Any, List

from sqlalchemy import func

from src.service.cinema.app.interface.i_repository import ICustomerRepository
from src.service.cinema.domain.entity.customer_entity import Customer
from src.service.cinema.driven_adapter.model.customer_model import CustomerModel
from src.service.cinema.driven_adapter.repo.sqlalchemy_repository import SqlAlchemyRepository


class CustomerRepositoryImpl(SqlAlchemyRepository[CustomerModel, Customer], ICustomerRepository):
    model = CustomerModel

    def _to_entity(self, row: Any) -> Customer:
        return Customer(
            id=row.id,
            full_name=row.full_name,
            phone=row.phone,
            email=row.email,
            version_id=row.version_id,
        )

    def _to_values(self, entity: Customer) -> dict[str, Any]:
        return {'full_name': entity.full_name, 'phone': entity.phone, 'email': entity.email}

    async def find_by_name(self, name: str) -> List[Customer]:
        pattern = f'%{name.strip().lower()}%'
        return await self._select(func.lower(self.table.c.full_name).like(pattern))
