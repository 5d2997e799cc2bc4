from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_seat_use_case import CreateSeatUseCase
from src.service.cinema.app.command.delete_entity_use_case import DeleteEntityUseCase
from src.service.cinema.app.command.update_seat_use_case import UpdateSeatUseCase
from src.service.cinema.app.query.seat_query_use_case import SeatQueryUseCase
from src.service.cinema.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from src.service.cinema.driving_adapter.http_controller.schema.seat_schema import (
    SeatListingResponse,
    SeatRequest,
    SeatResponse,
)


router = APIRouter(dependencies=[Depends(require_principal)])


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_seats(
    use_case: SeatQueryUseCase = Depends(SeatQueryUseCase.depends),
) -> List[SeatListingResponse]:
    seats = await use_case.list_seats()
    return [SeatListingResponse.model_validate(seat, from_attributes=True) for seat in seats]


@router.get('/{seat_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_seat(
    seat_id: int,
    use_case: SeatQueryUseCase = Depends(SeatQueryUseCase.depends),
) -> SeatResponse:
    seat = await use_case.get_seat(seat_id=seat_id)
    return SeatResponse.model_validate(seat, from_attributes=True)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_seat(
    request: SeatRequest,
    use_case: CreateSeatUseCase = Depends(CreateSeatUseCase.depends),
) -> SeatResponse:
    seat = await use_case.create_seat(
        hall_id=request.hall_id, row=request.row, number=request.number
    )
    return SeatResponse.model_validate(seat, from_attributes=True)


@router.put('/{seat_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_seat(
    seat_id: int,
    request: SeatRequest,
    use_case: UpdateSeatUseCase = Depends(UpdateSeatUseCase.depends),
) -> SeatResponse:
    seat = await use_case.update_seat(
        seat_id=seat_id, hall_id=request.hall_id, row=request.row, number=request.number
    )
    return SeatResponse.model_validate(seat, from_attributes=True)


@router.delete('/{seat_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_seat(
    seat_id: int,
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_seat(seat_id=seat_id)
