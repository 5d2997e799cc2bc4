from typing import List

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_hall_use_case import CreateHallUseCase
from src.service.cinema.app.command.delete_entity_use_case import DeleteEntityUseCase
from src.service.cinema.app.command.update_hall_use_case import UpdateHallUseCase
from src.service.cinema.app.query.hall_query_use_case import HallQueryUseCase
from src.service.cinema.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from src.service.cinema.driving_adapter.http_controller.schema.hall_schema import (
    CreateHallRequest,
    HallResponse,
    UpdateHallRequest,
)


router = APIRouter(dependencies=[Depends(require_principal)])


@router.get('/by-name', status_code=status.HTTP_200_OK)
@Logger.io
async def find_hall_by_name(
    name: str = Query(..., min_length=1),
    use_case: HallQueryUseCase = Depends(HallQueryUseCase.depends),
) -> HallResponse:
    hall = await use_case.find_hall_by_name(name=name)
    return HallResponse.model_validate(hall, from_attributes=True)


@router.put('/by-name', status_code=status.HTTP_200_OK)
@Logger.io
async def update_hall_by_name(
    request: UpdateHallRequest,
    name: str = Query(..., min_length=1),
    use_case: UpdateHallUseCase = Depends(UpdateHallUseCase.depends),
) -> HallResponse:
    hall = await use_case.update_hall_by_name(
        name=name, new_name=request.name, capacity=request.capacity
    )
    return HallResponse.model_validate(hall, from_attributes=True)


@router.delete('/by-name', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_hall_by_name(
    name: str = Query(..., min_length=1),
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_hall_by_name(name=name)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_halls(
    use_case: HallQueryUseCase = Depends(HallQueryUseCase.depends),
) -> List[HallResponse]:
    halls = await use_case.list_halls()
    return [HallResponse.model_validate(hall, from_attributes=True) for hall in halls]


@router.get('/{hall_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_hall(
    hall_id: int,
    use_case: HallQueryUseCase = Depends(HallQueryUseCase.depends),
) -> HallResponse:
    hall = await use_case.get_hall(hall_id=hall_id)
    return HallResponse.model_validate(hall, from_attributes=True)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_hall(
    request: CreateHallRequest,
    use_case: CreateHallUseCase = Depends(CreateHallUseCase.depends),
) -> HallResponse:
    hall = await use_case.create_hall(name=request.name, capacity=request.capacity)
    return HallResponse.model_validate(hall, from_attributes=True)


@router.put('/{hall_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_hall(
    hall_id: int,
    request: UpdateHallRequest,
    use_case: UpdateHallUseCase = Depends(UpdateHallUseCase.depends),
) -> HallResponse:
    hall = await use_case.update_hall(
        hall_id=hall_id, name=request.name, capacity=request.capacity
    )
    return HallResponse.model_validate(hall, from_attributes=True)


@router.delete('/{hall_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_hall(
    hall_id: int,
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_hall(hall_id=hall_id)
