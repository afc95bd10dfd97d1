"""
API endpoints for user/company permissions.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.deps import get_current_user, get_db
from kontaflow.core.settings import settings
from kontaflow.schemas.common import DataResponse, DeleteResponse, MessageResponse
from kontaflow.schemas.user import CurrentUser
from kontaflow.schemas.user_company import (
    UserCompanyCreate, UserCompanyFilter, UserCompanyRead, UserCompanyUpdate
)
from kontaflow.services.user_company_service import UserCompanyService
from kontaflow.utils.pagination import PagedResponse, create_paged_response, page_offset

router = APIRouter()


@router.get("", response_model=PagedResponse[UserCompanyRead], summary="List company permissions")
async def list_user_companies(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    user_id: Optional[int] = Query(None, alias="userId", gt=0),
    company_id: Optional[int] = Query(None, alias="companyId", gt=0),
    can_write: Optional[bool] = Query(None, alias="canWrite"),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    filters = UserCompanyFilter(user_id=user_id, company_id=company_id, can_write=can_write)
    permissions, total = await UserCompanyService(db).list_permissions(
        filters, current_user.id, page_offset(page, limit), limit
    )
    return create_paged_response([UserCompanyRead.model_validate(p) for p in permissions], total, page, limit)


@router.get(
    "/by-user/{user_id}",
    response_model=DataResponse[List[UserCompanyRead]],
    summary="Companies a user can access"
)
async def list_by_user(
    user_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    permissions = await UserCompanyService(db).list_by_user(user_id, current_user.id)
    return DataResponse(data=[UserCompanyRead.model_validate(p) for p in permissions])


@router.get(
    "/by-company/{company_id}",
    response_model=DataResponse[List[UserCompanyRead]],
    summary="Users with access to a company"
)
async def list_by_company(
    company_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    permissions = await UserCompanyService(db).list_by_company(company_id, current_user.id)
    return DataResponse(data=[UserCompanyRead.model_validate(p) for p in permissions])


@router.get("/{user_id}/{company_id}", response_model=DataResponse[UserCompanyRead], summary="Get permission")
async def get_user_company(
    user_id: int = Path(..., gt=0),
    company_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    permission = await UserCompanyService(db).get_permission(user_id, company_id, current_user.id)
    return DataResponse(data=UserCompanyRead.model_validate(permission))


@router.post(
    "",
    response_model=MessageResponse[UserCompanyRead],
    status_code=status.HTTP_201_CREATED,
    summary="Grant company access"
)
async def grant_company_access(
    permission_data: UserCompanyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    permission = await UserCompanyService(db).grant_access(permission_data, current_user.id)
    return MessageResponse(
        data=UserCompanyRead.model_validate(permission),
        message="Company access granted successfully"
    )


@router.put(
    "/{user_id}/{company_id}",
    response_model=MessageResponse[UserCompanyRead],
    summary="Update company access"
)
async def update_company_access(
    permission_data: UserCompanyUpdate,
    user_id: int = Path(..., gt=0),
    company_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    permission = await UserCompanyService(db).update_access(user_id, company_id, permission_data, current_user.id)
    return MessageResponse(
        data=UserCompanyRead.model_validate(permission),
        message="Company access updated successfully"
    )


@router.delete("/{user_id}/{company_id}", response_model=DeleteResponse, summary="Revoke company access")
async def revoke_company_access(
    user_id: int = Path(..., gt=0),
    company_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await UserCompanyService(db).revoke_access(user_id, company_id, current_user.id)
    return DeleteResponse(message="Company access revoked successfully")
