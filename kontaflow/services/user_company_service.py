from typing import List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models.company import Company
from kontaflow.models.user import User
from kontaflow.models.user_company import UserCompany
from kontaflow.repositories.user_company import UserCompanyRepository
from kontaflow.schemas.user_company import UserCompanyCreate, UserCompanyFilter, UserCompanyUpdate
from kontaflow.services.economic_group_service import ensure_group_access
from kontaflow.utils.exceptions import ConflictError, NotFoundError
from kontaflow.utils.logging import get_logger

logger = get_logger(__name__)

COMPANY_ACCESS_DENIED = "You do not have access to this company"


class UserCompanyService:
    """Permisos de lectura/escritura de usuarios sobre empresas"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = UserCompanyRepository(db)

    async def _get_accessible_company(self, company_id: int, user_id: int) -> Company:
        company = await self.db.get(Company, company_id)
        if company is None:
            raise NotFoundError("Company", company_id)
        await ensure_group_access(self.db, company.economic_group_id, user_id, COMPANY_ACCESS_DENIED)
        return company

    async def _get_pair(self, user_id: int, company_id: int, caller_id: int) -> UserCompany:
        await self._get_accessible_company(company_id, caller_id)
        permission = await self.repository.get_pair(user_id, company_id)
        if permission is None:
            raise NotFoundError("User-Company permission")
        return permission

    async def list_permissions(
        self,
        filters: UserCompanyFilter,
        caller_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[UserCompany], int]:
        if filters.company_id is not None:
            await self._get_accessible_company(filters.company_id, caller_id)
        return await self.repository.list(filters, caller_id, offset, limit)

    async def list_by_user(self, user_id: int, caller_id: int) -> List[UserCompany]:
        """Empresas de un usuario, limitadas a los grupos visibles para quien consulta"""
        if await self.db.get(User, user_id) is None:
            raise NotFoundError("User", user_id)
        return await self.repository.list_by_user(user_id, caller_id)

    async def list_by_company(self, company_id: int, caller_id: int) -> List[UserCompany]:
        await self._get_accessible_company(company_id, caller_id)
        return await self.repository.list_by_company(company_id)

    async def get_permission(self, user_id: int, company_id: int, caller_id: int) -> UserCompany:
        return await self._get_pair(user_id, company_id, caller_id)

    async def grant_access(self, data: UserCompanyCreate, caller_id: int) -> UserCompany:
        await self._get_accessible_company(data.company_id, caller_id)

        if await self.db.get(User, data.user_id) is None:
            raise NotFoundError("User", data.user_id)

        if await self.repository.get_pair(data.user_id, data.company_id) is not None:
            raise ConflictError(
                "User already has access to this company. Use update to modify permissions.",
                "userId_companyId"
            )

        permission = UserCompany(user_id=data.user_id, company_id=data.company_id, can_write=data.can_write)
        await self.repository.add(permission)
        await self.db.commit()

        logger.info(f"Company access granted: user={data.user_id} company={data.company_id}")
        return await self.repository.get_pair(data.user_id, data.company_id)

    async def update_access(
        self,
        user_id: int,
        company_id: int,
        data: UserCompanyUpdate,
        caller_id: int
    ) -> UserCompany:
        permission = await self._get_pair(user_id, company_id, caller_id)
        await self.repository.update(permission, {"can_write": data.can_write})
        await self.db.commit()

        logger.info(f"Company access updated: user={user_id} company={company_id} can_write={data.can_write}")
        return await self.repository.get_pair(user_id, company_id)

    async def revoke_access(self, user_id: int, company_id: int, caller_id: int) -> None:
        permission = await self._get_pair(user_id, company_id, caller_id)
        await self.repository.delete(permission)
        await self.db.commit()
        logger.info(f"Company access revoked: user={user_id} company={company_id}")
