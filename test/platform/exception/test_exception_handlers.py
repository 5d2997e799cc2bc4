from unittest.mock import MagicMock, patch

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.exception.exceptions import (
    ConcurrencyConflictError,
    ConstraintViolationError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger


def _client_raising(error: Exception) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get('/boom')
    async def boom() -> None:
        raise error

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.unit
class TestExceptionHandlers:
    @pytest.mark.parametrize(
        'error, status_code, detail',
        [
            (NotFoundError('Hall not found'), 404, 'Hall not found'),
            (
                ConcurrencyConflictError(),
                409,
                'The record was modified by another request, retry with fresh data',
            ),
            (ValueError('Unknown movie fields: rating'), 400, 'Unknown movie fields: rating'),
        ],
    )
    def test_domain_errors_map_to_detail(
        self, error: Exception, status_code: int, detail: str
    ) -> None:
        response = _client_raising(error).get('/boom')

        assert response.status_code == status_code
        assert response.json() == {'detail': detail}

    def test_unpromoted_constraint_violation_is_logged_by_name(self) -> None:
        # Arrange
        violation = ConstraintViolationError(
            'uq_seat_hall_row_number', detail='UNIQUE constraint failed: seat.hall_id'
        )
        client = _client_raising(violation)

        # Act
        with patch.object(Logger, 'base', MagicMock()) as base_logger:
            response = client.get('/boom')

        # Assert
        assert response.status_code == 500
        assert response.json() == {'detail': 'Internal server error'}
        base_logger.bind.assert_called_once_with(constraint='uq_seat_hall_row_number')
        message = base_logger.bind.return_value.error.call_args.args[0]
        assert 'uq_seat_hall_row_number' in message
        assert 'GET /boom' in message
