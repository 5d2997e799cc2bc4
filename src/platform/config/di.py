"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema.app.reservation_guard import ReservationGuard
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine manager, DATABASE_URL_ASYNC from settings)
    database = providers.Singleton(Database)

    # One Unit of Work (and therefore one session) per request
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session_factory
    )

    # Stateless domain services
    reservation_guard = providers.Singleton(ReservationGuard)

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()
