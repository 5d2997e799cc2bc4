from typing import Any

from src.service.cinema.app.interface.i_repository import IHallRepository
from src.service.cinema.domain.entity.hall_entity import Hall
from src.service.cinema.driven_adapter.model.hall_model import HallModel
from src.service.cinema.driven_adapter.repo.sqlalchemy_repository import SqlAlchemyRepository


class HallRepositoryImpl(SqlAlchemyRepository[HallModel, Hall], IHallRepository):
    model = HallModel

    def _to_entity(self, row: Any) -> Hall:
        return Hall(id=row.id, name=row.name, capacity=row.capacity, version_id=row.version_id)

    def _to_values(self, entity: Hall) -> dict[str, Any]:
        return {'name': entity.name, 'name_key': entity.name_key, 'capacity': entity.capacity}
