from test.service.cinema.fixtures import catalog  # noqa: F401
