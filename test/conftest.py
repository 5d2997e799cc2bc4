"""
Test Configuration and Fixtures

This module provides:
- Test environment setup (log directory, debug logging) before application imports
- A throw-away SQLite database per test (aiosqlite, foreign keys enforced)
- Unit of Work factory and ReservationGuard bound to that database

Architecture:
- Unit tests (test/**/unit/): mocked Unit of Work, no database
- Integration tests (test/**/integration/): real SQLite file in tmp_path
"""

# =============================================================================
# Environment setup MUST happen before any other imports
# Settings and the loguru sinks read these at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('DEPLOY_ENV', 'test')
    os.environ.setdefault('SERVICE_NAME', 'cinema-service-test')
    os.environ['PHONE_COUNTRY_CODE'] = '971'
    os.environ['PHONE_TRUNK_PREFIX'] = '0'
    os.environ['PHONE_NATIONAL_LENGTH'] = '9'


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable  # noqa: E402

import pytest  # noqa: E402

from src.platform.database.orm_db_setting import Database  # noqa: E402
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from src.service.cinema.app.reservation_guard import ReservationGuard  # noqa: E402


def sqlite_url(directory: Path) -> str:
    return f'sqlite+aiosqlite:///{directory / "cinema_test.db"}'


# =============================================================================
# Database Fixtures
# =============================================================================
@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    db = Database(url=sqlite_url(tmp_path))
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], SqlAlchemyUnitOfWork]:
    """Each call returns a fresh Unit of Work, i.e. one independent request"""

    def _make() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(database.session_factory)

    return _make


@pytest.fixture
def guard() -> ReservationGuard:
    return ReservationGuard()
