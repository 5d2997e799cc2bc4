"""
Bearer token verification

Tokens are issued by the operator identity gate (or `create_token` in scripts/tests)
and carry the operator in `sub`. The cinema service keeps no user store.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import attrs
import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError


@attrs.define(frozen=True)
class Principal:
    subject: str
    claims: Dict[str, Any] = attrs.field(factory=dict)


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_token(self, subject: str, **claims: Any) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            'sub': subject,
            'iat': now,
            'exp': now + timedelta(minutes=self.token_expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token, self.secret, algorithms=[self.algorithm], options={'require': ['sub', 'exp']}
            )
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    def get_principal(self, token: Optional[str]) -> Optional[Principal]:
        if not token:
            return None
        try:
            payload = self.decode_token(token)
        except AuthenticationError:
            return None
        return Principal(subject=str(payload['sub']), claims=payload)
