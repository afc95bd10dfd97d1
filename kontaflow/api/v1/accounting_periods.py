"""
API endpoints for accounting periods, including close and reopen transitions.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.deps import get_current_user, get_db
from kontaflow.core.settings import settings
from kontaflow.models.accounting_period import PeriodType
from kontaflow.schemas.accounting_period import (
    AccountingPeriodCreate, AccountingPeriodFilter, AccountingPeriodRead, AccountingPeriodUpdate
)
from kontaflow.schemas.common import DataResponse, DeleteResponse, MessageResponse
from kontaflow.schemas.user import CurrentUser
from kontaflow.services.accounting_period_service import AccountingPeriodService
from kontaflow.utils.pagination import PagedResponse, create_paged_response, page_offset

router = APIRouter()


@router.get(
    "",
    response_model=PagedResponse[AccountingPeriodRead],
    summary="List accounting periods",
    description="Periods ordered by fiscal year and month, newest first"
)
async def list_periods(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_ACCOUNT_PAGE_SIZE, ge=1, le=settings.MAX_ACCOUNT_PAGE_SIZE),
    economic_group_id: Optional[int] = Query(None, alias="economicGroupId", gt=0),
    period_type: Optional[PeriodType] = Query(None, alias="type"),
    fiscal_year: Optional[int] = Query(None, alias="fiscalYear", ge=2000, le=2100),
    closed: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    filters = AccountingPeriodFilter(
        economic_group_id=economic_group_id,
        type=period_type,
        fiscal_year=fiscal_year,
        closed=closed
    )
    periods, total = await AccountingPeriodService(db).list_periods(
        filters, current_user.id, page_offset(page, limit), limit
    )
    return create_paged_response([AccountingPeriodRead.model_validate(p) for p in periods], total, page, limit)


@router.get(
    "/by-group/{economic_group_id}",
    response_model=DataResponse[List[AccountingPeriodRead]],
    summary="Accounting periods of an economic group"
)
async def list_periods_by_group(
    economic_group_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    periods = await AccountingPeriodService(db).list_by_group(economic_group_id, current_user.id)
    return DataResponse(data=[AccountingPeriodRead.model_validate(p) for p in periods])


@router.get("/{period_id}", response_model=DataResponse[AccountingPeriodRead], summary="Get accounting period")
async def get_period(
    period_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    period = await AccountingPeriodService(db).get_period(period_id, current_user.id)
    return DataResponse(data=AccountingPeriodRead.model_validate(period))


@router.post(
    "",
    response_model=MessageResponse[AccountingPeriodRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create accounting period"
)
async def create_period(
    period_data: AccountingPeriodCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    period = await AccountingPeriodService(db).create_period(period_data, current_user.id)
    return MessageResponse(
        data=AccountingPeriodRead.model_validate(period),
        message="Accounting period created successfully"
    )


@router.put(
    "/{period_id}",
    response_model=MessageResponse[AccountingPeriodRead],
    summary="Update accounting period",
    description="Only the closed flag can change; it follows the close/reopen rules"
)
async def update_period(
    period_data: AccountingPeriodUpdate,
    period_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    period = await AccountingPeriodService(db).update_period(period_id, period_data, current_user.id)
    return MessageResponse(
        data=AccountingPeriodRead.model_validate(period),
        message="Accounting period updated successfully"
    )


@router.post(
    "/{period_id}/close",
    response_model=MessageResponse[AccountingPeriodRead],
    summary="Close accounting period",
    description="Refused while DRAFT or PENDING_APPROVAL entries fall inside the period"
)
async def close_period(
    period_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    period = await AccountingPeriodService(db).close_period(period_id, current_user.id)
    return MessageResponse(
        data=AccountingPeriodRead.model_validate(period),
        message="Accounting period closed successfully"
    )


@router.post(
    "/{period_id}/reopen",
    response_model=MessageResponse[AccountingPeriodRead],
    summary="Reopen accounting period"
)
async def reopen_period(
    period_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    period = await AccountingPeriodService(db).reopen_period(period_id, current_user.id)
    return MessageResponse(
        data=AccountingPeriodRead.model_validate(period),
        message="Accounting period reopened successfully"
    )


@router.delete("/{period_id}", response_model=DeleteResponse, summary="Delete accounting period")
async def delete_period(
    period_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await AccountingPeriodService(db).delete_period(period_id, current_user.id)
    return DeleteResponse(message="Accounting period deleted successfully")
