"""
Unit test configuration for the cinema service.

Builds a MagicMock Unit of Work whose repositories are AsyncMocks, so use cases and
the guard can be exercised without a database.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


REPOSITORIES = ('customers', 'halls', 'seats', 'movies', 'showtimes', 'tickets')


def _mock_repository() -> MagicMock:
    repo = MagicMock()
    for method in ('get_by_id', 'find', 'find_all', 'get_all', 'any', 'add', 'update', 'delete'):
        setattr(repo, method, AsyncMock())
    repo.any.return_value = False
    # Snapshot view shares the mocked methods
    repo.no_tracking.return_value = repo
    return repo


@pytest.fixture
def mock_uow() -> MagicMock:
    uow = MagicMock()
    uow.__aenter__.return_value = uow
    uow.__aexit__.return_value = None
    uow.commit = AsyncMock(return_value=1)
    uow.rollback = AsyncMock()
    for name in REPOSITORIES:
        setattr(uow, name, _mock_repository())
    return uow
