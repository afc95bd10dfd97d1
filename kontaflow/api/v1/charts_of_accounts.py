"""
API endpoints for charts of accounts.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.deps import get_current_user, get_db
from kontaflow.core.settings import settings
from kontaflow.schemas.chart_of_accounts import (
    ChartOfAccountsCreate, ChartOfAccountsFilter, ChartOfAccountsRead, ChartOfAccountsUpdate
)
from kontaflow.schemas.common import DataResponse, DeleteResponse, MessageResponse
from kontaflow.schemas.user import CurrentUser
from kontaflow.services.chart_of_accounts_service import ChartOfAccountsService
from kontaflow.utils.pagination import PagedResponse, create_paged_response, page_offset

router = APIRouter()


@router.get("", response_model=PagedResponse[ChartOfAccountsRead], summary="List charts of accounts")
async def list_charts(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None),
    economic_group_id: Optional[int] = Query(None, alias="economicGroupId", gt=0),
    active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    filters = ChartOfAccountsFilter(search=search, economic_group_id=economic_group_id, active=active)
    charts, total = await ChartOfAccountsService(db).list_charts(
        filters, current_user.id, page_offset(page, limit), limit
    )
    return create_paged_response([ChartOfAccountsRead.model_validate(c) for c in charts], total, page, limit)


@router.get(
    "/by-group/{economic_group_id}",
    response_model=DataResponse[ChartOfAccountsRead],
    summary="Chart of accounts of an economic group"
)
async def get_chart_by_group(
    economic_group_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    chart = await ChartOfAccountsService(db).get_by_group(economic_group_id, current_user.id)
    return DataResponse(data=ChartOfAccountsRead.model_validate(chart))


@router.get("/{chart_id}", response_model=DataResponse[ChartOfAccountsRead], summary="Get chart of accounts")
async def get_chart(
    chart_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    chart = await ChartOfAccountsService(db).get_chart(chart_id, current_user.id)
    return DataResponse(data=ChartOfAccountsRead.model_validate(chart))


@router.post(
    "",
    response_model=MessageResponse[ChartOfAccountsRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create chart of accounts",
    description="A group holds a single chart of accounts"
)
async def create_chart(
    chart_data: ChartOfAccountsCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    chart = await ChartOfAccountsService(db).create_chart(chart_data, current_user.id)
    return MessageResponse(
        data=ChartOfAccountsRead.model_validate(chart),
        message="Chart of Accounts created successfully"
    )


@router.put("/{chart_id}", response_model=MessageResponse[ChartOfAccountsRead], summary="Update chart of accounts")
async def update_chart(
    chart_data: ChartOfAccountsUpdate,
    chart_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    chart = await ChartOfAccountsService(db).update_chart(chart_id, chart_data, current_user.id)
    return MessageResponse(
        data=ChartOfAccountsRead.model_validate(chart),
        message="Chart of Accounts updated successfully"
    )


@router.delete("/{chart_id}", response_model=DeleteResponse, summary="Delete chart of accounts")
async def delete_chart(
    chart_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await ChartOfAccountsService(db).delete_chart(chart_id, current_user.id)
    return DeleteResponse(message="Chart of Accounts deleted successfully")
