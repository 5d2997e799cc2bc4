class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class ConcurrencyConflictError(ConflictError):
    """A row staged for update/delete was changed or removed by someone else before commit."""

    def __init__(
        self, message: str = 'The record was modified by another request, retry with fresh data'
    ) -> None:
        super().__init__(message)


class ConstraintViolationError(CustomBaseError):
    """
    A storage constraint rejected the batch.

    Internal: callers are expected to promote it into a domain error before it leaves
    the application layer, hence the 500 if one ever escapes.
    """

    def __init__(self, constraint: str | None, *, foreign_key: bool = False, detail: str = '') -> None:
        self.constraint = constraint
        self.foreign_key = foreign_key
        self.detail = detail
        super().__init__(f'Constraint violated: {constraint or "unknown"}', 500)
