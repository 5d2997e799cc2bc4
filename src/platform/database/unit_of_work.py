"""
Unit of Work Pattern - one session/transaction per logical request

Architecture:
- UoW owns the session lifecycle (opened on enter, closed on exit)
- UoW owns commit/rollback; nothing is durable before commit
- Repositories are bound to the UoW's session on enter
- Use cases coordinate several repositories through one UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, Callable

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_error_translator import translate_storage_errors
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.cinema.app.interface.i_repository import (
        ICustomerRepository,
        IHallRepository,
        IMovieRepository,
        ISeatRepository,
        IShowtimeRepository,
        ITicketRepository,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the cinema service

    Usage:
        async with uow:
            ticket = await uow.tickets.add(ticket)
            await uow.commit()

    Leaving the block without committing rolls back everything staged inside it.
    """

    customers: ICustomerRepository
    halls: IHallRepository
    seats: ISeatRepository
    movies: IMovieRepository
    showtimes: IShowtimeRepository
    tickets: ITicketRepository

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> int:
        """
        Apply every staged change atomically.

        Returns the number of rows affected since the previous commit.
        Raises ConcurrencyConflictError or ConstraintViolationError; the transaction is
        rolled back in both cases.
        """
        return await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A fresh AsyncSession is taken from `session_factory` on every `async with`, so one
    instance must not be entered by two requests at the same time.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._rows_affected = 0

    def _count_flushed_rows(self, session: Any, _flush_context: Any) -> None:
        # after_flush still sees the pre-flush new/dirty/deleted collections
        self._rows_affected += (
            len(session.new)
            + len(session.deleted)
            + sum(1 for obj in session.dirty if session.is_modified(obj))
        )

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.cinema.driven_adapter.repo.customer_repository_impl import (
            CustomerRepositoryImpl,
        )
        from src.service.cinema.driven_adapter.repo.hall_repository_impl import HallRepositoryImpl
        from src.service.cinema.driven_adapter.repo.movie_repository_impl import (
            MovieRepositoryImpl,
        )
        from src.service.cinema.driven_adapter.repo.seat_repository_impl import SeatRepositoryImpl
        from src.service.cinema.driven_adapter.repo.showtime_repository_impl import (
            ShowtimeRepositoryImpl,
        )
        from src.service.cinema.driven_adapter.repo.ticket_repository_impl import (
            TicketRepositoryImpl,
        )

        self.session = self._session_factory()
        self._rows_affected = 0
        event.listen(self.session.sync_session, 'after_flush', self._count_flushed_rows)

        # Create repositories with shared session
        self.customers = CustomerRepositoryImpl(self.session)
        self.halls = HallRepositoryImpl(self.session)
        self.seats = SeatRepositoryImpl(self.session)
        self.movies = MovieRepositoryImpl(self.session)
        self.showtimes = ShowtimeRepositoryImpl(self.session)
        self.tickets = TicketRepositoryImpl(self.session)

        await super().__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self) -> int:
        if self.session is None:
            raise RuntimeError('Unit of Work is not active, use "async with uow:"')
        try:
            with translate_storage_errors():
                await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        rows_affected, self._rows_affected = self._rows_affected, 0
        Logger.base.debug(f'💾 [UoW] Committed {rows_affected} row(s)')
        return rows_affected

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
