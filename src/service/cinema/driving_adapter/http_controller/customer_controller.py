from typing import List

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_customer_use_case import CreateCustomerUseCase
from src.service.cinema.app.command.delete_entity_use_case import DeleteEntityUseCase
from src.service.cinema.app.command.update_customer_use_case import UpdateCustomerUseCase
from src.service.cinema.app.query.customer_query_use_case import CustomerQueryUseCase
from src.service.cinema.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from src.service.cinema.driving_adapter.http_controller.schema.customer_schema import (
    CreateCustomerRequest,
    CustomerResponse,
    UpdateCustomerRequest,
)


router = APIRouter(dependencies=[Depends(require_principal)])


# ============================ Finders (before /{customer_id}) ============================


@router.get('/by-phone', status_code=status.HTTP_200_OK)
@Logger.io
async def find_customer_by_phone(
    phone: str = Query(..., min_length=1),
    use_case: CustomerQueryUseCase = Depends(CustomerQueryUseCase.depends),
) -> CustomerResponse:
    customer = await use_case.find_customer_by_phone(phone=phone)
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.get('/by-email', status_code=status.HTTP_200_OK)
@Logger.io
async def find_customer_by_email(
    email: str = Query(..., min_length=1),
    use_case: CustomerQueryUseCase = Depends(CustomerQueryUseCase.depends),
) -> CustomerResponse:
    customer = await use_case.find_customer_by_email(email=email)
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.get('/by-name', status_code=status.HTTP_200_OK)
@Logger.io
async def find_customers_by_name(
    name: str = Query(..., min_length=1),
    use_case: CustomerQueryUseCase = Depends(CustomerQueryUseCase.depends),
) -> List[CustomerResponse]:
    customers = await use_case.find_customers_by_name(name=name)
    return [CustomerResponse.model_validate(c, from_attributes=True) for c in customers]


@router.put('/by-email', status_code=status.HTTP_200_OK)
@Logger.io
async def update_customer_by_email(
    request: UpdateCustomerRequest,
    email: str = Query(..., min_length=1),
    use_case: UpdateCustomerUseCase = Depends(UpdateCustomerUseCase.depends),
) -> CustomerResponse:
    customer = await use_case.update_customer_by_email(
        email=email,
        full_name=request.full_name,
        phone=request.phone,
        new_email=request.email,
    )
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.put('/by-phone', status_code=status.HTTP_200_OK)
@Logger.io
async def update_customer_by_phone(
    request: UpdateCustomerRequest,
    phone: str = Query(..., min_length=1),
    use_case: UpdateCustomerUseCase = Depends(UpdateCustomerUseCase.depends),
) -> CustomerResponse:
    customer = await use_case.update_customer_by_phone(
        phone=phone,
        full_name=request.full_name,
        new_phone=request.phone,
        email=request.email,
    )
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.delete('/by-email', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_customer_by_email(
    email: str = Query(..., min_length=1),
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_customer_by_email(email=email)


@router.delete('/by-phone', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_customer_by_phone(
    phone: str = Query(..., min_length=1),
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_customer_by_phone(phone=phone)


# ============================ CRUD ============================


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_customers(
    use_case: CustomerQueryUseCase = Depends(CustomerQueryUseCase.depends),
) -> List[CustomerResponse]:
    customers = await use_case.list_customers()
    return [CustomerResponse.model_validate(c, from_attributes=True) for c in customers]


@router.get('/{customer_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_customer(
    customer_id: int,
    use_case: CustomerQueryUseCase = Depends(CustomerQueryUseCase.depends),
) -> CustomerResponse:
    customer = await use_case.get_customer(customer_id=customer_id)
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_customer(
    request: CreateCustomerRequest,
    use_case: CreateCustomerUseCase = Depends(CreateCustomerUseCase.depends),
) -> CustomerResponse:
    customer = await use_case.create_customer(
        full_name=request.full_name,
        phone=request.phone,
        email=request.email,
    )
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.put('/{customer_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_customer(
    customer_id: int,
    request: UpdateCustomerRequest,
    use_case: UpdateCustomerUseCase = Depends(UpdateCustomerUseCase.depends),
) -> CustomerResponse:
    customer = await use_case.update_customer(
        customer_id=customer_id,
        full_name=request.full_name,
        phone=request.phone,
        email=request.email,
    )
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.delete('/{customer_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_customer(
    customer_id: int,
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_customer(customer_id=customer_id)
