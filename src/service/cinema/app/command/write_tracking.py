from contextlib import contextmanager
import time
from typing import Iterator

from src.platform.exception.exceptions import (
    ConcurrencyConflictError,
    ConflictError,
    ConstraintViolationError,
    NotFoundError,
)
from src.platform.metrics.cinema_metrics import metrics


def _result_of(error: Exception) -> str:
    if isinstance(error, ConcurrencyConflictError):
        return 'concurrency_conflict'
    if isinstance(error.__cause__, ConstraintViolationError):
        return 'not_found' if isinstance(error, NotFoundError) else 'constraint_rejected'
    if isinstance(error, ConflictError):
        return 'precheck_rejected'
    if isinstance(error, NotFoundError):
        return 'not_found'
    return 'error'


@contextmanager
def track_write(*, entity: str, operation: str) -> Iterator[None]:
    """Record the outcome and duration of one write workflow."""
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        metrics.record_attempt(entity=entity, result=_result_of(e))
        raise
    else:
        metrics.record_attempt(entity=entity, result='success')
    finally:
        metrics.observe_write(
            entity=entity, operation=operation, duration=time.perf_counter() - start
        )
