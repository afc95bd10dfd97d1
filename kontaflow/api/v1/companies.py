"""
API endpoints for companies.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.deps import get_current_user, get_db
from kontaflow.core.settings import settings
from kontaflow.schemas.common import DataResponse, DeleteResponse, MessageResponse
from kontaflow.schemas.company import CompanyCreate, CompanyFilter, CompanyRead, CompanyUpdate
from kontaflow.schemas.user import CurrentUser
from kontaflow.services.company_service import CompanyService
from kontaflow.utils.pagination import PagedResponse, create_paged_response, page_offset
from kontaflow.utils.validators import Country

router = APIRouter()


@router.get(
    "",
    response_model=PagedResponse[CompanyRead],
    summary="List companies",
    description="Companies ordered by name; without economicGroupId only the caller's groups are listed"
)
async def list_companies(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None, description="Search in name, trade name and RUT"),
    active: Optional[bool] = Query(None),
    economic_group_id: Optional[int] = Query(None, alias="economicGroupId", gt=0),
    country: Optional[Country] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    filters = CompanyFilter(
        search=search,
        active=active,
        economic_group_id=economic_group_id,
        country=country
    )
    companies, total = await CompanyService(db).list_companies(
        filters, current_user.id, page_offset(page, limit), limit
    )
    return create_paged_response([CompanyRead.model_validate(c) for c in companies], total, page, limit)


@router.get(
    "/by-group/{economic_group_id}",
    response_model=DataResponse[List[CompanyRead]],
    summary="Companies of an economic group"
)
async def list_companies_by_group(
    economic_group_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    companies = await CompanyService(db).list_by_group(economic_group_id, current_user.id)
    return DataResponse(data=[CompanyRead.model_validate(c) for c in companies])


@router.get("/{company_id}", response_model=DataResponse[CompanyRead], summary="Get company")
async def get_company(
    company_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    company = await CompanyService(db).get_company(company_id, current_user.id)
    return DataResponse(data=CompanyRead.model_validate(company))


@router.post(
    "",
    response_model=MessageResponse[CompanyRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create company"
)
async def create_company(
    company_data: CompanyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    company = await CompanyService(db).create_company(company_data, current_user.id)
    return MessageResponse(data=CompanyRead.model_validate(company), message="Company created successfully")


@router.put("/{company_id}", response_model=MessageResponse[CompanyRead], summary="Update company")
async def update_company(
    company_data: CompanyUpdate,
    company_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    company = await CompanyService(db).update_company(company_id, company_data, current_user.id)
    return MessageResponse(data=CompanyRead.model_validate(company), message="Company updated successfully")


@router.delete(
    "/{company_id}",
    response_model=DeleteResponse,
    summary="Delete company",
    description="Soft delete; refused when the company has journal entries"
)
async def delete_company(
    company_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    await CompanyService(db).delete_company(company_id, current_user.id)
    return DeleteResponse(message="Company deleted successfully")
