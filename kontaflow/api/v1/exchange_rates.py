"""
API endpoints for exchange rates of an economic group.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.deps import get_current_user, get_db
from kontaflow.core.settings import settings
from kontaflow.schemas.common import DataResponse, DeleteResponse, MessageResponse
from kontaflow.schemas.currency import (
    CURRENCY_REGEX, ExchangeRateCreate, ExchangeRateFilter, ExchangeRateRead, ExchangeRateUpdate
)
from kontaflow.schemas.user import CurrentUser
from kontaflow.services.exchange_rate_service import ExchangeRateService
from kontaflow.utils.pagination import PagedResponse, create_paged_response, page_offset

router = APIRouter()


@router.get(
    "",
    response_model=PagedResponse[ExchangeRateRead],
    summary="List exchange rates",
    description="Exchange rates ordered by date, newest first"
)
async def list_exchange_rates(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    economic_group_id: Optional[int] = Query(None, alias="economicGroupId", gt=0),
    source_currency: Optional[str] = Query(None, alias="sourceCurrency", pattern=CURRENCY_REGEX),
    target_currency: Optional[str] = Query(None, alias="targetCurrency", pattern=CURRENCY_REGEX),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    filters = ExchangeRateFilter(
        economic_group_id=economic_group_id,
        source_currency=source_currency,
        target_currency=target_currency,
        date_from=date_from,
        date_to=date_to
    )
    rates, total = await ExchangeRateService(db).list_rates(
        filters, current_user.id, page_offset(page, limit), limit
    )
    return create_paged_response([ExchangeRateRead.model_validate(r) for r in rates], total, page, limit)


@router.get(
    "/by-group/{economic_group_id}",
    response_model=DataResponse[List[ExchangeRateRead]],
    summary="Exchange rates of an economic group"
)
async def list_rates_by_group(
    economic_group_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    rates = await ExchangeRateService(db).list_by_group(economic_group_id, current_user.id)
    return DataResponse(data=[ExchangeRateRead.model_validate(r) for r in rates])


@router.get("/{rate_id}", response_model=DataResponse[ExchangeRateRead], summary="Get exchange rate")
async def get_exchange_rate(
    rate_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    rate = await ExchangeRateService(db).get_rate(rate_id, current_user.id)
    return DataResponse(data=ExchangeRateRead.model_validate(rate))


@router.post(
    "",
    response_model=MessageResponse[ExchangeRateRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create exchange rate",
    description="Quote of a currency against the group's base currency"
)
async def create_exchange_rate(
    rate_data: ExchangeRateCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    rate = await ExchangeRateService(db).create_rate(rate_data, current_user.id)
    return MessageResponse(data=ExchangeRateRead.model_validate(rate), message="Exchange rate created successfully")


@router.put("/{rate_id}", response_model=MessageResponse[ExchangeRateRead], summary="Update exchange rate")
async def update_exchange_rate(
    rate_data: ExchangeRateUpdate,
    rate_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    rate = await ExchangeRateService(db).update_rate(rate_id, rate_data, current_user.id)
    return MessageResponse(data=ExchangeRateRead.model_validate(rate), message="Exchange rate updated successfully")


@router.delete("/{rate_id}", response_model=DeleteResponse, summary="Delete exchange rate")
async def delete_exchange_rate(
    rate_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await ExchangeRateService(db).delete_rate(rate_id, current_user.id)
    return DeleteResponse(message="Exchange rate deleted successfully")
