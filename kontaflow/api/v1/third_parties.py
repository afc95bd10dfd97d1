"""
Router factory shared by customers and suppliers.
Both resources expose the same CRUD surface over the same column set.
"""
from typing import List, Optional, Type

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.deps import get_current_user, get_db
from kontaflow.core.settings import settings
from kontaflow.schemas.common import DataResponse, DeleteResponse, MessageResponse
from kontaflow.schemas.third_party import ThirdPartyCreate, ThirdPartyFilter, ThirdPartyRead, ThirdPartyUpdate
from kontaflow.schemas.user import CurrentUser
from kontaflow.services.third_party_service import ThirdPartyService
from kontaflow.utils.pagination import PagedResponse, create_paged_response, page_offset


def build_third_party_router(
    service_class: Type[ThirdPartyService],
    create_schema: Type[ThirdPartyCreate],
    update_schema: Type[ThirdPartyUpdate],
    read_schema: Type[ThirdPartyRead]
) -> APIRouter:
    router = APIRouter()
    label = service_class.label

    @router.get("", response_model=PagedResponse[read_schema], summary=f"List {service_class.plural}")
    async def list_items(
        page: int = Query(1, ge=1),
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
        search: Optional[str] = Query(None, description="Search in name, RUT and email"),
        active: Optional[bool] = Query(None),
        economic_group_id: Optional[int] = Query(None, alias="economicGroupId", gt=0),
        db: AsyncSession = Depends(get_db),
        current_user: CurrentUser = Depends(get_current_user)
    ):
        filters = ThirdPartyFilter(search=search, active=active, economic_group_id=economic_group_id)
        items, total = await service_class(db).list_items(
            filters, current_user.id, page_offset(page, limit), limit
        )
        return create_paged_response([read_schema.model_validate(i) for i in items], total, page, limit)

    @router.get(
        "/by-group/{economic_group_id}",
        response_model=DataResponse[List[read_schema]],
        summary=f"{label}s of an economic group"
    )
    async def list_by_group(
        economic_group_id: int = Path(..., gt=0),
        db: AsyncSession = Depends(get_db),
        current_user: CurrentUser = Depends(get_current_user)
    ):
        items = await service_class(db).list_by_group(economic_group_id, current_user.id)
        return DataResponse(data=[read_schema.model_validate(i) for i in items])

    @router.get("/{item_id}", response_model=DataResponse[read_schema], summary=f"Get {label.lower()}")
    async def get_item(
        item_id: int = Path(..., gt=0),
        db: AsyncSession = Depends(get_db),
        current_user: CurrentUser = Depends(get_current_user)
    ):
        item = await service_class(db).get_item(item_id, current_user.id)
        return DataResponse(data=read_schema.model_validate(item))

    @router.post(
        "",
        response_model=MessageResponse[read_schema],
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {label.lower()}"
    )
    async def create_item(
        item_data: create_schema,
        db: AsyncSession = Depends(get_db),
        current_user: CurrentUser = Depends(get_current_user)
    ):
        item = await service_class(db).create_item(item_data, current_user.id)
        return MessageResponse(data=read_schema.model_validate(item), message=f"{label} created successfully")

    @router.put("/{item_id}", response_model=MessageResponse[read_schema], summary=f"Update {label.lower()}")
    async def update_item(
        item_data: update_schema,
        item_id: int = Path(..., gt=0),
        db: AsyncSession = Depends(get_db),
        current_user: CurrentUser = Depends(get_current_user)
    ):
        item = await service_class(db).update_item(item_id, item_data, current_user.id)
        return MessageResponse(data=read_schema.model_validate(item), message=f"{label} updated successfully")

    @router.delete("/{item_id}", response_model=DeleteResponse, summary=f"Delete {label.lower()}")
    async def delete_item(
        item_id: int = Path(..., gt=0),
        db: AsyncSession = Depends(get_db),
        current_user: CurrentUser = Depends(get_current_user)
    ):
        await service_class(db).delete_item(item_id, current_user.id)
        return DeleteResponse(message=f"{label} deleted successfully")

    return router
