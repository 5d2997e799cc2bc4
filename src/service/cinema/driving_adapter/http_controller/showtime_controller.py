from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase
from src.service.cinema.app.command.delete_entity_use_case import DeleteEntityUseCase
from src.service.cinema.app.command.update_showtime_use_case import UpdateShowtimeUseCase
from src.service.cinema.app.query.showtime_query_use_case import ShowtimeQueryUseCase
from src.service.cinema.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from src.service.cinema.driving_adapter.http_controller.schema.showtime_schema import (
    ShowtimeListingResponse,
    ShowtimeRequest,
    ShowtimeResponse,
)


router = APIRouter(dependencies=[Depends(require_principal)])


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_showtimes(
    use_case: ShowtimeQueryUseCase = Depends(ShowtimeQueryUseCase.depends),
) -> List[ShowtimeListingResponse]:
    showtimes = await use_case.list_showtimes()
    return [ShowtimeListingResponse.model_validate(s, from_attributes=True) for s in showtimes]


@router.get('/{showtime_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_showtime(
    showtime_id: int,
    use_case: ShowtimeQueryUseCase = Depends(ShowtimeQueryUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.get_showtime(showtime_id=showtime_id)
    return ShowtimeResponse.model_validate(showtime, from_attributes=True)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_showtime(
    request: ShowtimeRequest,
    use_case: CreateShowtimeUseCase = Depends(CreateShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.create_showtime(
        movie_id=request.movie_id,
        hall_id=request.hall_id,
        starts_at=request.starts_at,
        price=request.price,
    )
    return ShowtimeResponse.model_validate(showtime, from_attributes=True)


@router.put('/{showtime_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_showtime(
    showtime_id: int,
    request: ShowtimeRequest,
    use_case: UpdateShowtimeUseCase = Depends(UpdateShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.update_showtime(
        showtime_id=showtime_id,
        movie_id=request.movie_id,
        hall_id=request.hall_id,
        starts_at=request.starts_at,
        price=request.price,
    )
    return ShowtimeResponse.model_validate(showtime, from_attributes=True)


@router.delete('/{showtime_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_showtime(
    showtime_id: int,
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_showtime(showtime_id=showtime_id)
