"""
API endpoints for the currency catalogue.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.deps import get_current_user, get_db
from kontaflow.core.settings import settings
from kontaflow.schemas.common import DataResponse, DeleteResponse, MessageResponse
from kontaflow.schemas.currency import CurrencyCreate, CurrencyFilter, CurrencyRead, CurrencyUpdate
from kontaflow.schemas.user import CurrentUser
from kontaflow.services.currency_service import CurrencyService
from kontaflow.utils.pagination import PagedResponse, create_paged_response, page_offset

router = APIRouter()


@router.get("", response_model=PagedResponse[CurrencyRead], summary="List currencies")
async def list_currencies(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_CURRENCY_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None, description="Search in code and name"),
    active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    filters = CurrencyFilter(search=search, active=active)
    currencies, total = await CurrencyService(db).list_currencies(filters, page_offset(page, limit), limit)
    return create_paged_response([CurrencyRead.model_validate(c) for c in currencies], total, page, limit)


@router.get("/active", response_model=DataResponse[List[CurrencyRead]], summary="Active currencies")
async def list_active_currencies(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    currencies = await CurrencyService(db).list_active()
    return DataResponse(data=[CurrencyRead.model_validate(c) for c in currencies])


@router.get("/{code}", response_model=DataResponse[CurrencyRead], summary="Get currency")
async def get_currency(
    code: str = Path(..., min_length=3, max_length=3),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    currency = await CurrencyService(db).get_currency(code)
    return DataResponse(data=CurrencyRead.model_validate(currency))


@router.post(
    "",
    response_model=MessageResponse[CurrencyRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create currency"
)
async def create_currency(
    currency_data: CurrencyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    currency = await CurrencyService(db).create_currency(currency_data)
    return MessageResponse(data=CurrencyRead.model_validate(currency), message="Currency created successfully")


@router.put("/{code}", response_model=MessageResponse[CurrencyRead], summary="Update currency")
async def update_currency(
    currency_data: CurrencyUpdate,
    code: str = Path(..., min_length=3, max_length=3),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    currency = await CurrencyService(db).update_currency(code, currency_data)
    return MessageResponse(data=CurrencyRead.model_validate(currency), message="Currency updated successfully")


@router.delete("/{code}", response_model=DeleteResponse, summary="Delete currency")
async def delete_currency(
    code: str = Path(..., min_length=3, max_length=3),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await CurrencyService(db).delete_currency(code)
    return DeleteResponse(message="Currency deleted successfully")
