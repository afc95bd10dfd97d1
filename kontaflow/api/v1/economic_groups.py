"""
API endpoints for economic groups.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.deps import get_authenticated_user, get_current_user, get_db
from kontaflow.core.settings import settings
from kontaflow.schemas.common import DataResponse, DeleteResponse, MessageResponse
from kontaflow.schemas.economic_group import (
    EconomicGroupCreate, EconomicGroupMembership, EconomicGroupRead, EconomicGroupUpdate
)
from kontaflow.schemas.user import CurrentUser
from kontaflow.services.economic_group_service import EconomicGroupService
from kontaflow.utils.pagination import PagedResponse, create_paged_response, page_offset
from kontaflow.utils.validators import Country

router = APIRouter()


@router.get(
    "",
    response_model=PagedResponse[EconomicGroupRead],
    summary="List economic groups",
    description="Economic groups the caller belongs to, newest first"
)
async def list_economic_groups(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None, description="Search by name"),
    active: Optional[bool] = Query(None),
    main_country: Optional[Country] = Query(None, alias="mainCountry"),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    service = EconomicGroupService(db)
    groups, total = await service.list_groups(
        current_user.id,
        page_offset(page, limit),
        limit,
        search=search,
        active=active,
        main_country=main_country.value if main_country else None
    )
    items = [EconomicGroupRead.model_validate(group) for group in groups]
    return create_paged_response(items, total, page, limit)


@router.get(
    "/my-groups",
    response_model=DataResponse[List[EconomicGroupMembership]],
    summary="Groups of the authenticated user",
    description="Every group the caller belongs to together with the caller's role"
)
async def get_my_groups(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_authenticated_user)
):
    memberships = await EconomicGroupService(db).get_my_groups(current_user.id)
    return DataResponse(data=[EconomicGroupMembership.model_validate(m) for m in memberships])


@router.get(
    "/{group_id}",
    response_model=DataResponse[EconomicGroupRead],
    summary="Get economic group"
)
async def get_economic_group(
    group_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    group = await EconomicGroupService(db).get_group(group_id, current_user.id)
    return DataResponse(data=EconomicGroupRead.model_validate(group))


@router.post(
    "",
    response_model=MessageResponse[EconomicGroupRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create economic group",
    description="Creates the group with its accounting configuration and an empty chart of accounts"
)
async def create_economic_group(
    group_data: EconomicGroupCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_authenticated_user)
):
    group = await EconomicGroupService(db).create_group(group_data, current_user.id)
    return MessageResponse(
        data=EconomicGroupRead.model_validate(group),
        message="Economic group created successfully"
    )


@router.put(
    "/{group_id}",
    response_model=MessageResponse[EconomicGroupRead],
    summary="Update economic group"
)
async def update_economic_group(
    group_data: EconomicGroupUpdate,
    group_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    group = await EconomicGroupService(db).update_group(group_id, group_data, current_user.id)
    return MessageResponse(
        data=EconomicGroupRead.model_validate(group),
        message="Economic group updated successfully"
    )


@router.delete(
    "/{group_id}",
    response_model=DeleteResponse,
    summary="Delete economic group",
    description="Soft delete; refused while the group has active companies"
)
async def delete_economic_group(
    group_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await EconomicGroupService(db).delete_group(group_id, current_user.id)
    return DeleteResponse(message="Economic group deleted successfully")
