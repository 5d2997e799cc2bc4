from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_ticket_use_case import CreateTicketUseCase
from src.service.cinema.app.command.delete_entity_use_case import DeleteEntityUseCase
from src.service.cinema.app.command.update_ticket_use_case import UpdateTicketUseCase
from src.service.cinema.app.query.ticket_query_use_case import TicketQueryUseCase
from src.service.cinema.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from src.service.cinema.driving_adapter.http_controller.schema.ticket_schema import (
    TicketListingResponse,
    TicketRequest,
    TicketResponse,
)


router = APIRouter(dependencies=[Depends(require_principal)])


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_tickets(
    use_case: TicketQueryUseCase = Depends(TicketQueryUseCase.depends),
) -> List[TicketListingResponse]:
    tickets = await use_case.list_tickets()
    return [TicketListingResponse.model_validate(t, from_attributes=True) for t in tickets]


@router.get('/{ticket_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_ticket(
    ticket_id: int,
    use_case: TicketQueryUseCase = Depends(TicketQueryUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.get_ticket(ticket_id=ticket_id)
    return TicketResponse.model_validate(ticket, from_attributes=True)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_ticket(
    request: TicketRequest,
    use_case: CreateTicketUseCase = Depends(CreateTicketUseCase.depends),
) -> TicketResponse:
    """Sell a seat; 409 when it is already taken for this showtime."""
    ticket = await use_case.create_ticket(
        showtime_id=request.showtime_id,
        seat_id=request.seat_id,
        customer_id=request.customer_id,
        purchased_at=request.purchased_at,
    )
    return TicketResponse.model_validate(ticket, from_attributes=True)


@router.put('/{ticket_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_ticket(
    ticket_id: int,
    request: TicketRequest,
    use_case: UpdateTicketUseCase = Depends(UpdateTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.update_ticket(
        ticket_id=ticket_id,
        showtime_id=request.showtime_id,
        seat_id=request.seat_id,
        customer_id=request.customer_id,
        purchased_at=request.purchased_at,
    )
    return TicketResponse.model_validate(ticket, from_attributes=True)


@router.delete('/{ticket_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_ticket(
    ticket_id: int,
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_ticket(ticket_id=ticket_id)
