from src.platform.exception.exceptions import ConflictError, DomainError


class InvalidPhoneError(DomainError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f'Phone number {raw!r} is not a recognised mobile number', 400)


class SeatAlreadyReservedError(ConflictError):
    def __init__(self, showtime_id: int | None = None, seat_id: int | None = None) -> None:
        self.showtime_id = showtime_id
        self.seat_id = seat_id
        super().__init__('This seat is already reserved for this show')


class DuplicateContactError(ConflictError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f'{field.capitalize()} is already used')


class DuplicateHallNameError(ConflictError):
    def __init__(self, name: str | None = None) -> None:
        self.name = name
        super().__init__('A hall with this name already exists')


class DuplicateSeatError(ConflictError):
    def __init__(self) -> None:
        super().__init__('Seat with the same hall/row/number already exists')


class DuplicateMovieTitleError(ConflictError):
    def __init__(self, title: str | None = None) -> None:
        self.title = title
        super().__init__('A movie with this title already exists')
