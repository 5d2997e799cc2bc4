from prometheus_client import Counter, Histogram


class CinemaMetrics:
    """
    Reservation-integrity metrics

    `result` label values:
        success             the write committed
        precheck_rejected   a pre-check found a duplicate, nothing was written
        constraint_rejected the storage constraint rejected the commit (race lost)
        concurrency_conflict the row changed underneath an update/delete
        not_found           a referenced row does not exist
    """

    def __init__(self):
        self.reservation_attempts = Counter(
            'cinema_reservation_attempts_total',
            'Write attempts on cinema entities by outcome',
            ['entity', 'result'],
        )

        self.write_duration = Histogram(
            'cinema_write_duration_seconds',
            'Duration of a write workflow, from pre-check to commit',
            ['entity', 'operation'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

    def record_attempt(self, *, entity: str, result: str) -> None:
        self.reservation_attempts.labels(entity=entity, result=result).inc()

    def observe_write(self, *, entity: str, operation: str, duration: float) -> None:
        self.write_duration.labels(entity=entity, operation=operation).observe(duration)


# Global metrics instance
metrics = CinemaMetrics()
