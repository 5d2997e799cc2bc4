import jwt
import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@pytest.fixture
def jwt_auth() -> JwtAuth:
    return JwtAuth()


@pytest.mark.unit
class TestJwtAuth:
    def test_token_round_trips_subject_and_claims(self, jwt_auth: JwtAuth) -> None:
        token = jwt_auth.create_token('box-office-1', role='clerk')

        principal = jwt_auth.get_principal(token)

        assert principal is not None
        assert principal.subject == 'box-office-1'
        assert principal.claims['role'] == 'clerk'

    def test_tampered_token_is_rejected(self, jwt_auth: JwtAuth) -> None:
        forged = jwt.encode({'sub': 'x', 'exp': 9999999999}, 'wrong-key', algorithm='HS256')

        with pytest.raises(AuthenticationError):
            jwt_auth.decode_token(forged)
        assert jwt_auth.get_principal(forged) is None

    def test_token_without_expiry_is_rejected(self, jwt_auth: JwtAuth) -> None:
        token = jwt.encode(
            {'sub': 'x'}, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM
        )

        assert jwt_auth.get_principal(token) is None

    def test_missing_token_has_no_principal(self, jwt_auth: JwtAuth) -> None:
        assert jwt_auth.get_principal(None) is None
        assert jwt_auth.get_principal('') is None
