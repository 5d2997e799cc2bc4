"""
HTTP API tests

The container's database is overridden with a per-test SQLite file; every request
carries a bearer token signed with the configured SECRET_KEY.
"""

from collections.abc import Generator
from decimal import Decimal
from pathlib import Path
from typing import Any

from dependency_injector import providers
from fastapi.testclient import TestClient
import pytest

from src.platform.config.di import container
from src.platform.database.orm_db_setting import Database
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from test.conftest import sqlite_url
from test.test_main import app


@pytest.fixture
def anonymous_client(tmp_path: Path) -> Generator[TestClient, None, None]:
    container.database.override(providers.Singleton(Database, url=sqlite_url(tmp_path)))
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        container.database.reset_override()


@pytest.fixture
def client(anonymous_client: TestClient) -> TestClient:
    token = JwtAuth().create_token('box-office-1')
    anonymous_client.headers['Authorization'] = f'Bearer {token}'
    return anonymous_client


def _post(client: TestClient, path: str, payload: dict[str, Any]) -> dict[str, Any]:
    response = client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def screening(client: TestClient) -> dict[str, Any]:
    """One hall with two seats, one movie, one showtime and two customers"""
    hall = _post(client, '/api/halls', {'name': 'Hall A', 'capacity': 50})
    seats = [
        _post(client, '/api/seats', {'hall_id': hall['id'], 'row': 'a', 'number': n})
        for n in (1, 2)
    ]
    movie = _post(
        client,
        '/api/movies',
        {'title': 'Dune', 'genre': 'Sci-Fi', 'duration_minutes': 155, 'release_date': '2021-10-22'},
    )
    showtime = _post(
        client,
        '/api/showtimes',
        {
            'movie_id': movie['id'],
            'hall_id': hall['id'],
            'starts_at': '2026-11-01T20:00:00Z',
            'price': '45.00',
        },
    )
    jane = _post(client, '/api/customers', {'full_name': 'Jane Doe', 'phone': '0501234567'})
    john = _post(client, '/api/customers', {'full_name': 'John Roe', 'email': 'john@x.io'})
    return {
        'hall': hall,
        'seats': seats,
        'movie': movie,
        'showtime': showtime,
        'jane': jane,
        'john': john,
    }


@pytest.mark.integration
class TestAccessControl:
    def test_health_is_public(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_api_requires_bearer_token(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get('/api/halls')

        assert response.status_code == 401
        assert response.json() == {'detail': 'Not authenticated'}

    def test_forged_token_is_rejected(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get(
            '/api/halls', headers={'Authorization': 'Bearer not.a.token'}
        )

        assert response.status_code == 401


@pytest.mark.integration
class TestTicketSales:
    def test_sell_seat_then_reject_second_sale(
        self, client: TestClient, screening: dict[str, Any]
    ) -> None:
        payload = {
            'showtime_id': screening['showtime']['id'],
            'seat_id': screening['seats'][0]['id'],
            'customer_id': screening['jane']['id'],
        }

        first = client.post('/api/tickets', json=payload)
        second = client.post('/api/tickets', json={**payload, 'customer_id': screening['john']['id']})

        assert first.status_code == 201
        assert first.json()['version_id'] == 1
        assert second.status_code == 409
        assert second.json() == {'detail': 'This seat is already reserved for this show'}

    def test_ticket_listing_shows_display_names(
        self, client: TestClient, screening: dict[str, Any]
    ) -> None:
        _post(
            client,
            '/api/tickets',
            {
                'showtime_id': screening['showtime']['id'],
                'seat_id': screening['seats'][1]['id'],
                'customer_id': screening['john']['id'],
            },
        )

        (ticket,) = client.get('/api/tickets').json()

        assert ticket['movie_title'] == 'Dune'
        assert ticket['hall_name'] == 'Hall A'
        assert ticket['seat_label'] == 'A-2'
        assert ticket['customer_name'] == 'John Roe'

    def test_move_ticket_and_delete_it(self, client: TestClient, screening: dict[str, Any]) -> None:
        ticket = _post(
            client,
            '/api/tickets',
            {
                'showtime_id': screening['showtime']['id'],
                'seat_id': screening['seats'][0]['id'],
                'customer_id': screening['jane']['id'],
            },
        )

        moved = client.put(
            f'/api/tickets/{ticket["id"]}',
            json={
                'showtime_id': screening['showtime']['id'],
                'seat_id': screening['seats'][1]['id'],
                'customer_id': screening['jane']['id'],
            },
        )
        deleted = client.delete(f'/api/tickets/{ticket["id"]}')

        assert moved.status_code == 200
        assert moved.json()['seat_id'] == screening['seats'][1]['id']
        assert moved.json()['version_id'] == 2
        assert deleted.status_code == 204
        assert client.get(f'/api/tickets/{ticket["id"]}').status_code == 404

    def test_ticket_for_unknown_showtime(self, client: TestClient, screening: dict[str, Any]) -> None:
        response = client.post(
            '/api/tickets',
            json={
                'showtime_id': 999,
                'seat_id': screening['seats'][0]['id'],
                'customer_id': screening['jane']['id'],
            },
        )

        assert response.status_code == 404
        assert response.json() == {'detail': 'Showtime not found'}


@pytest.mark.integration
class TestCustomerApi:
    def test_phone_stored_in_canonical_form(self, client: TestClient) -> None:
        created = _post(client, '/api/customers', {'full_name': 'Jane Doe', 'phone': '050 123 4567'})

        assert created['phone'] == '+971501234567'

    def test_same_phone_other_spelling_conflicts(self, client: TestClient) -> None:
        _post(client, '/api/customers', {'full_name': 'Jane Doe', 'phone': '0501234567'})

        response = client.post(
            '/api/customers', json={'full_name': 'John Roe', 'phone': '971501234567'}
        )

        assert response.status_code == 409
        assert response.json() == {'detail': 'Phone is already used'}

    def test_malformed_phone_is_bad_request(self, client: TestClient) -> None:
        response = client.post('/api/customers', json={'full_name': 'Jane', 'phone': '123'})

        assert response.status_code == 400

    def test_finders(self, client: TestClient, screening: dict[str, Any]) -> None:
        by_phone = client.get('/api/customers/by-phone', params={'phone': '+971 50 123 4567'})
        by_email = client.get('/api/customers/by-email', params={'email': 'JOHN@X.IO'})
        by_name = client.get('/api/customers/by-name', params={'name': 'roe'})

        assert by_phone.json()['id'] == screening['jane']['id']
        assert by_email.json()['id'] == screening['john']['id']
        assert [c['id'] for c in by_name.json()] == [screening['john']['id']]

    def test_partial_update_and_delete_by_email(
        self, client: TestClient, screening: dict[str, Any]
    ) -> None:
        john_id = screening['john']['id']

        updated = client.put(f'/api/customers/{john_id}', json={'phone': '0559876543'})
        deleted = client.delete('/api/customers/by-email', params={'email': 'john@x.io'})

        assert updated.status_code == 200
        assert updated.json()['email'] == 'john@x.io'
        assert updated.json()['phone'] == '+971559876543'
        assert deleted.status_code == 204
        assert client.get(f'/api/customers/{john_id}').status_code == 404

    def test_update_by_email_and_by_phone(
        self, client: TestClient, screening: dict[str, Any]
    ) -> None:
        by_email = client.put(
            '/api/customers/by-email', params={'email': 'JOHN@X.IO'}, json={'full_name': 'Johnny'}
        )
        by_phone = client.put(
            '/api/customers/by-phone',
            params={'phone': '050 123 4567'},
            json={'phone': '0551112222'},
        )
        missing = client.put(
            '/api/customers/by-email', params={'email': 'nobody@x.io'}, json={'full_name': 'X'}
        )

        assert by_email.status_code == 200
        assert (by_email.json()['id'], by_email.json()['full_name']) == (
            screening['john']['id'],
            'Johnny',
        )
        assert by_phone.status_code == 200
        assert by_phone.json()['phone'] == '+971551112222'
        assert missing.status_code == 404

    def test_update_by_phone_onto_taken_email_conflicts(
        self, client: TestClient, screening: dict[str, Any]
    ) -> None:
        response = client.put(
            '/api/customers/by-phone', params={'phone': '0501234567'}, json={'email': 'john@x.io'}
        )

        assert response.status_code == 409


@pytest.mark.integration
class TestCatalogApi:
    def test_duplicate_hall_name_ignoring_case(self, client: TestClient) -> None:
        _post(client, '/api/halls', {'name': 'Hall A', 'capacity': 50})

        response = client.post('/api/halls', json={'name': 'HALL A', 'capacity': 10})

        assert response.status_code == 409

    def test_request_validation_is_bad_request(self, client: TestClient) -> None:
        response = client.post('/api/halls', json={'name': 'A', 'capacity': 0})

        assert response.status_code == 400
        assert {error['loc'][-1] for error in response.json()['detail']} == {'name', 'capacity'}

    def test_duplicate_seat(self, client: TestClient, screening: dict[str, Any]) -> None:
        response = client.post(
            '/api/seats', json={'hall_id': screening['hall']['id'], 'row': 'A', 'number': 1}
        )

        assert response.status_code == 409

    def test_find_hall_and_movie_by_name(
        self, client: TestClient, screening: dict[str, Any]
    ) -> None:
        hall = client.get('/api/halls/by-name', params={'name': 'hall a'})
        movie = client.get('/api/movies/by-title', params={'title': 'DUNE'})
        missing = client.get('/api/movies/by-title', params={'title': 'Arrival'})

        assert hall.json()['id'] == screening['hall']['id']
        assert movie.json()['id'] == screening['movie']['id']
        assert missing.status_code == 404

    def test_listings(self, client: TestClient, screening: dict[str, Any]) -> None:
        seats = client.get('/api/seats').json()
        showtimes = client.get('/api/showtimes').json()

        assert [(s['row'], s['number'], s['hall_name']) for s in seats] == [
            ('A', 1, 'Hall A'),
            ('A', 2, 'Hall A'),
        ]
        assert showtimes[0]['movie_title'] == 'Dune'
        assert Decimal(showtimes[0]['price']) == Decimal('45.00')

    def test_delete_hall_cascades(self, client: TestClient, screening: dict[str, Any]) -> None:
        response = client.delete(f'/api/halls/{screening["hall"]["id"]}')

        assert response.status_code == 204
        assert client.get('/api/seats').json() == []
        assert client.get('/api/showtimes').json() == []
        assert client.get(f'/api/movies/{screening["movie"]["id"]}').status_code == 200

    def test_update_and_delete_hall_by_name(
        self, client: TestClient, screening: dict[str, Any]
    ) -> None:
        updated = client.put('/api/halls/by-name', params={'name': 'hall a'}, json={'capacity': 80})
        deleted = client.delete('/api/halls/by-name', params={'name': 'HALL A'})
        missing = client.delete('/api/halls/by-name', params={'name': 'Hall A'})

        assert updated.status_code == 200
        assert (updated.json()['name'], updated.json()['capacity']) == ('Hall A', 80)
        assert deleted.status_code == 204
        assert missing.status_code == 404
        assert client.get('/api/halls').json() == []

    def test_update_and_delete_movie_by_title(
        self, client: TestClient, screening: dict[str, Any]
    ) -> None:
        updated = client.put(
            '/api/movies/by-title',
            params={'title': 'dune'},
            json={'duration_minutes': 156, 'release_date': '2021-09-03'},
        )
        deleted = client.delete('/api/movies/by-title', params={'title': 'DUNE'})

        assert updated.status_code == 200
        assert updated.json()['title'] == 'Dune'
        assert updated.json()['duration_minutes'] == 156
        assert updated.json()['genre'] is None
        assert deleted.status_code == 204
        assert client.get('/api/movies').json() == []

    def test_patch_movie(self, client: TestClient, screening: dict[str, Any]) -> None:
        movie_id = screening['movie']['id']

        retimed = client.patch(f'/api/movies/{movie_id}', json={'duration_minutes': 166})
        cleared = client.patch(f'/api/movies/{movie_id}', json={'genre': None})
        invalid = client.patch(f'/api/movies/{movie_id}', json={'duration_minutes': 0})
        missing = client.patch('/api/movies/999', json={'genre': 'Drama'})

        assert retimed.status_code == 200
        assert (retimed.json()['duration_minutes'], retimed.json()['genre']) == (166, 'Sci-Fi')
        assert cleared.json()['genre'] is None
        assert cleared.json()['duration_minutes'] == 166
        assert invalid.status_code == 400
        assert missing.status_code == 404

    def test_metrics_count_reservation_attempts(
        self, client: TestClient, screening: dict[str, Any]
    ) -> None:
        body = client.get('/metrics').text

        assert 'cinema_reservation_attempts_total' in body
        assert 'cinema_write_duration_seconds' in body
