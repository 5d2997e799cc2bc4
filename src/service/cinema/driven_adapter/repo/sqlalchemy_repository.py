"""
Generic SQLAlchemy repository

One subclass per entity supplies `model` plus the model <-> entity mapping
(`_to_entity` / `_to_values`); everything else is shared.

Tracked mode (default):
    reads go through the ORM session, share its identity map and autoflush staged work.
Snapshot mode (`no_tracking()`):
    reads select straight from the table with autoflush disabled and return
    disconnected entities; writes are rejected.
"""

from typing import Any, ClassVar, Generic, List, Optional, TypeVar

from sqlalchemy import ColumnElement, Select, Table, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import Base
from src.platform.database.storage_error_translator import translate_storage_errors
from src.platform.exception.exceptions import ConcurrencyConflictError


ModelT = TypeVar('ModelT', bound=Base)
EntityT = TypeVar('EntityT')


class SqlAlchemyRepository(Generic[ModelT, EntityT]):
    model: ClassVar[type[Base]]

    def __init__(self, session: AsyncSession, *, tracking: bool = True) -> None:
        self.session = session
        self._tracking = tracking

    # --- mapping, supplied by subclasses -----------------------------------------

    def _to_entity(self, row: Any) -> EntityT:
        """Build an entity from an ORM instance or a Core row (same attribute names)"""
        raise NotImplementedError

    def _to_values(self, entity: EntityT) -> dict[str, Any]:
        """Column values to persist, without `id` and `version_id`"""
        raise NotImplementedError

    # --- helpers ------------------------------------------------------------------

    @property
    def table(self) -> Table:
        return self.model.__table__  # type: ignore[return-value]

    @property
    def is_tracking(self) -> bool:
        return self._tracking

    def no_tracking(self) -> 'SqlAlchemyRepository[ModelT, EntityT]':
        return type(self)(self.session, tracking=False)

    def _conditions(
        self, criteria: dict[str, Any], exclude_id: Optional[int] = None
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        for name, value in criteria.items():
            if name not in self.table.c:
                raise ValueError(f'{self.model.__name__} has no column {name!r}')
            conditions.append(self.table.c[name] == value)
        if exclude_id is not None:
            conditions.append(self.table.c.id != exclude_id)
        return conditions

    async def _select(
        self, *conditions: ColumnElement[bool], limit: Optional[int] = None
    ) -> List[EntityT]:
        if self._tracking:
            stmt: Select[Any] = select(self.model).where(*conditions).order_by(self.table.c.id)
            if limit is not None:
                stmt = stmt.limit(limit)
            result = await self.session.scalars(stmt)
            return [self._to_entity(model) for model in result]

        stmt = select(self.table).where(*conditions).order_by(self.table.c.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        with self.session.sync_session.no_autoflush:
            rows = (await self.session.execute(stmt)).all()
        return [self._to_entity(row) for row in rows]

    def _ensure_writable(self) -> None:
        if not self._tracking:
            raise RuntimeError(f'{type(self).__name__} snapshot view is read-only')

    # --- reads --------------------------------------------------------------------

    async def get_by_id(self, entity_id: int) -> Optional[EntityT]:
        if self._tracking:
            model = await self.session.get(self.model, entity_id)
            return self._to_entity(model) if model is not None else None
        entities = await self._select(self.table.c.id == entity_id, limit=1)
        return entities[0] if entities else None

    async def find(self, **criteria: Any) -> Optional[EntityT]:
        entities = await self._select(*self._conditions(criteria), limit=1)
        return entities[0] if entities else None

    async def find_all(self, **criteria: Any) -> List[EntityT]:
        return await self._select(*self._conditions(criteria))

    async def get_all(self) -> List[EntityT]:
        return await self._select()

    async def any(self, *, exclude_id: Optional[int] = None, **criteria: Any) -> bool:
        stmt = select(self.table.c.id).where(*self._conditions(criteria, exclude_id)).limit(1)
        if self._tracking:
            return (await self.session.scalar(stmt)) is not None
        with self.session.sync_session.no_autoflush:
            return (await self.session.scalar(stmt)) is not None

    # --- staged writes ------------------------------------------------------------

    async def add(self, entity: EntityT) -> EntityT:
        self._ensure_writable()
        model = self.model(**self._to_values(entity))
        self.session.add(model)
        # Flush so the store assigns the key; still inside the open transaction
        with translate_storage_errors():
            await self.session.flush()
        return self._to_entity(model)

    async def update(self, entity: EntityT) -> EntityT:
        self._ensure_writable()
        entity_id = getattr(entity, 'id')
        expected_version = getattr(entity, 'version_id', None)

        model = await self.session.get(self.model, entity_id)
        if model is None:
            raise ConcurrencyConflictError()
        if expected_version is not None and getattr(model, 'version_id') != expected_version:
            raise ConcurrencyConflictError()

        for name, value in self._to_values(entity).items():
            setattr(model, name, value)
        # Always emit UPDATE ... WHERE version_id = <read version>, even with no net change
        setattr(model, 'version_id', getattr(model, 'version_id') + 1)
        return self._to_entity(model)

    async def delete(self, entity_id: int) -> bool:
        self._ensure_writable()
        model = await self.session.get(self.model, entity_id)
        if model is None:
            return False
        await self.session.delete(model)
        return True
