"""
API endpoints for chart-of-accounts accounts.
Provides CRUD operations plus flat and hierarchical views of a chart.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.deps import get_current_user, get_db
from kontaflow.core.settings import settings
from kontaflow.models.account import AccountType
from kontaflow.schemas.account import (
    AccountCreate, AccountDetail, AccountFilter, AccountRead, AccountTree, AccountUpdate
)
from kontaflow.schemas.common import DataResponse, DeleteResponse, MessageResponse
from kontaflow.schemas.user import CurrentUser
from kontaflow.services.account_service import AccountService
from kontaflow.utils.pagination import PagedResponse, create_paged_response, page_offset

router = APIRouter()


@router.get(
    "",
    response_model=PagedResponse[AccountRead],
    summary="List accounts",
    description="Accounts ordered by code with filtering"
)
async def list_accounts(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_ACCOUNT_PAGE_SIZE, ge=1, le=settings.MAX_ACCOUNT_PAGE_SIZE),
    search: Optional[str] = Query(None, description="Search in code and name"),
    chart_of_accounts_id: Optional[int] = Query(None, alias="chartOfAccountsId", gt=0),
    account_type: Optional[AccountType] = Query(None, alias="type"),
    level: Optional[int] = Query(None, ge=1, le=10),
    postable: Optional[bool] = Query(None),
    active: Optional[bool] = Query(None),
    parent_account_id: Optional[int] = Query(None, alias="parentAccountId", gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    filters = AccountFilter(
        search=search,
        chart_of_accounts_id=chart_of_accounts_id,
        type=account_type,
        level=level,
        postable=postable,
        active=active,
        parent_account_id=parent_account_id
    )
    accounts, total = await AccountService(db).list_accounts(
        filters, current_user.id, page_offset(page, limit), limit
    )
    return create_paged_response([AccountRead.model_validate(a) for a in accounts], total, page, limit)


@router.get(
    "/tree/{chart_id}",
    response_model=DataResponse[List[AccountTree]],
    summary="Account tree",
    description="Active accounts of a chart nested under their parents"
)
async def get_account_tree(
    chart_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    tree = await AccountService(db).get_account_tree(chart_id, current_user.id)
    return DataResponse(data=tree)


@router.get(
    "/by-chart/{chart_id}",
    response_model=DataResponse[List[AccountRead]],
    summary="Active accounts of a chart"
)
async def get_accounts_by_chart(
    chart_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    accounts = await AccountService(db).get_accounts_by_chart(chart_id, current_user.id)
    return DataResponse(data=[AccountRead.model_validate(a) for a in accounts])


@router.get("/{account_id}", response_model=DataResponse[AccountDetail], summary="Get account")
async def get_account(
    account_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    account = await AccountService(db).get_account(account_id, current_user.id)
    return DataResponse(data=AccountDetail.model_validate(account))


@router.post(
    "",
    response_model=MessageResponse[AccountRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create account"
)
async def create_account(
    account_data: AccountCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    account = await AccountService(db).create_account(account_data, current_user.id)
    return MessageResponse(data=AccountRead.model_validate(account), message="Account created successfully")


@router.put("/{account_id}", response_model=MessageResponse[AccountDetail], summary="Update account")
async def update_account(
    account_data: AccountUpdate,
    account_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    account = await AccountService(db).update_account(account_id, account_data, current_user.id)
    return MessageResponse(data=AccountDetail.model_validate(account), message="Account updated successfully")


@router.delete(
    "/{account_id}",
    response_model=DeleteResponse,
    summary="Delete account",
    description="Soft delete; refused with entry lines or subaccounts"
)
async def delete_account(
    account_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await AccountService(db).delete_account(account_id, current_user.id)
    return DeleteResponse(message="Account deleted successfully")
