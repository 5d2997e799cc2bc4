from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth, Principal


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> Optional[Principal]:
    if credentials is None:
        return None
    return jwt_auth.get_principal(credentials.credentials)


async def require_principal(
    principal: Optional[Principal] = Depends(get_current_principal),
) -> Principal:
    if principal is None:
        raise AuthenticationError('Not authenticated')
    return principal
