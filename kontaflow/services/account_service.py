from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models.account import Account, AccountType
from kontaflow.models.chart_of_accounts import ChartOfAccounts
from kontaflow.repositories.account import AccountRepository
from kontaflow.schemas.account import AccountCreate, AccountFilter, AccountTree, AccountUpdate
from kontaflow.services.economic_group_service import ensure_group_access
from kontaflow.utils.exceptions import BusinessRuleError, NotFoundError
from kontaflow.utils.logging import get_logger
from kontaflow.utils.validators import is_valid_account_code

logger = get_logger(__name__)

ACCOUNT_ACCESS_DENIED = "You do not have access to this account"
CHART_ACCESS_DENIED = "You do not have access to this chart of accounts"

# Tipos que exigen naturaleza corriente / no corriente
TYPES_REQUIRING_NATURE = (AccountType.ASSET, AccountType.LIABILITY)

# Columnas que no admiten NULL; un null explícito en la actualización se ignora
NON_NULLABLE_FIELDS = ("code", "name", "type", "level", "postable", "requires_auxiliary", "currency", "active")


class AccountService:
    """Servicio para operaciones de cuentas contables"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = AccountRepository(db)

    async def _get_accessible_chart(self, chart_id: int, user_id: int) -> ChartOfAccounts:
        chart = await self.db.get(ChartOfAccounts, chart_id)
        if chart is None:
            raise NotFoundError("Chart of Accounts", chart_id)
        await ensure_group_access(self.db, chart.economic_group_id, user_id, CHART_ACCESS_DENIED)
        return chart

    async def _ensure_account_access(self, account: Account, user_id: int) -> None:
        chart = await self.db.get(ChartOfAccounts, account.chart_of_accounts_id)
        await ensure_group_access(self.db, chart.economic_group_id, user_id, ACCOUNT_ACCESS_DENIED)

    def _validate_account_rules(self, values: Dict[str, Any]) -> None:
        """Reglas cruzadas: auxiliar, naturaleza y formato de código"""
        if values.get("requires_auxiliary") and not values.get("auxiliary_type"):
            raise BusinessRuleError(
                "Auxiliary type must be specified when account requires auxiliary",
                "MISSING_AUXILIARY_TYPE"
            )

        if values.get("type") in TYPES_REQUIRING_NATURE and not values.get("nature"):
            raise BusinessRuleError(
                "Asset and Liability accounts should have nature (CURRENT or NON_CURRENT)",
                "MISSING_NATURE"
            )

        if not is_valid_account_code(values["code"]):
            raise BusinessRuleError("Code must contain only numbers and dots", "INVALID_CODE_FORMAT")

    async def _validate_hierarchy(self, chart_id: int, parent_id: Optional[int], level: int) -> None:
        """
        La cuenta padre debe existir, pertenecer al mismo plan y tener
        exactamente un nivel menos; sin padre el nivel debe ser 1.
        Sólo las cuentas no imputables pueden tener subcuentas.
        """
        if parent_id is None:
            if level != 1:
                raise BusinessRuleError("Root accounts must have level 1", "INVALID_ROOT_LEVEL")
            return

        parent = await self.repository.get_by_id(parent_id)
        if parent is None:
            raise NotFoundError("Parent Account", parent_id)

        if parent.chart_of_accounts_id != chart_id:
            raise BusinessRuleError(
                "Parent account must be in the same chart of accounts",
                "INVALID_PARENT_CHART"
            )

        if level != parent.level + 1:
            raise BusinessRuleError(
                f"Account level must be {parent.level + 1} (parent level + 1)",
                "INVALID_LEVEL"
            )

        if parent.postable:
            raise BusinessRuleError(
                f"Cannot add subaccounts to postable account {parent.code}. Set it as non-postable first.",
                "PARENT_POSTABLE"
            )

    async def list_accounts(
        self,
        filters: AccountFilter,
        user_id: int,
        offset: int,
        limit: int
    ) -> Tuple[List[Account], int]:
        if filters.chart_of_accounts_id is not None:
            await self._get_accessible_chart(filters.chart_of_accounts_id, user_id)
        return await self.repository.list(filters, user_id, offset, limit)

    async def get_account(self, account_id: int, user_id: int) -> Account:
        """Cuenta con su cuenta padre y el total de subcuentas"""
        account = await self.repository.get_detail(account_id)
        if account is None:
            raise NotFoundError("Account", account_id)
        await self._ensure_account_access(account, user_id)
        return account

    async def get_accounts_by_chart(self, chart_id: int, user_id: int) -> List[Account]:
        await self._get_accessible_chart(chart_id, user_id)
        return await self.repository.list_active_by_chart(chart_id)

    async def get_account_tree(self, chart_id: int, user_id: int) -> List[AccountTree]:
        """
        Arma el árbol de cuentas activas de un plan.

        Las cuentas cuyo padre está inactivo quedan como raíces para no
        perderlas del árbol.
        """
        accounts = await self.get_accounts_by_chart(chart_id, user_id)

        nodes: Dict[int, AccountTree] = {
            account.id: AccountTree(
                id=account.id,
                code=account.code,
                name=account.name,
                type=account.type,
                level=account.level,
                postable=account.postable,
                parent_account_id=account.parent_account_id
            )
            for account in accounts
        }

        roots: List[AccountTree] = []
        for account in accounts:
            node = nodes[account.id]
            parent = nodes.get(account.parent_account_id) if account.parent_account_id else None
            if parent is None:
                roots.append(node)
            else:
                parent.subaccounts.append(node)

        return roots

    async def create_account(self, data: AccountCreate, user_id: int) -> Account:
        """Crear una nueva cuenta contable"""
        await self._get_accessible_chart(data.chart_of_accounts_id, user_id)

        values = data.model_dump()
        self._validate_account_rules(values)

        # Validar que no exista una cuenta con el mismo código en el plan
        if await self.repository.code_exists_in_chart(data.chart_of_accounts_id, data.code):
            raise BusinessRuleError(
                f"An account with code {data.code} already exists in this chart of accounts",
                "DUPLICATE_CODE"
            )

        await self._validate_hierarchy(data.chart_of_accounts_id, data.parent_account_id, data.level)

        account = Account(**values, active=True)
        await self.repository.add(account)
        await self.db.commit()
        await self.db.refresh(account)

        logger.info(f"Account created: id={account.id} code={account.code} chart={account.chart_of_accounts_id}")
        return account

    async def update_account(self, account_id: int, data: AccountUpdate, user_id: int) -> Account:
        account = await self.get_account(account_id, user_id)

        update_data = data.model_dump(exclude_unset=True)
        for field in NON_NULLABLE_FIELDS:
            if field in update_data and update_data[field] is None:
                del update_data[field]

        if update_data.get("parent_account_id") == account.id:
            raise BusinessRuleError("An account cannot be its own parent", "INVALID_PARENT")

        # Registro resultante de aplicar los cambios
        merged = {
            "code": account.code,
            "type": account.type,
            "level": account.level,
            "parent_account_id": account.parent_account_id,
            "requires_auxiliary": account.requires_auxiliary,
            "auxiliary_type": account.auxiliary_type,
            "nature": account.nature,
        }
        merged.update(update_data)
        self._validate_account_rules(merged)

        if "code" in update_data and await self.repository.code_exists_in_chart(
            account.chart_of_accounts_id, merged["code"], exclude_id=account.id
        ):
            raise BusinessRuleError(
                f"An account with code {merged['code']} already exists in this chart of accounts",
                "DUPLICATE_CODE"
            )

        if update_data.get("postable") is True and await self.repository.count_subaccounts(account.id) > 0:
            raise BusinessRuleError(
                "Cannot set account as postable because it has subaccounts",
                "HAS_SUBACCOUNTS"
            )

        if "parent_account_id" in update_data or "level" in update_data:
            await self._validate_hierarchy(
                account.chart_of_accounts_id, merged["parent_account_id"], merged["level"]
            )

        await self.repository.update(account, update_data)
        await self.db.commit()
        await self.db.refresh(account)

        logger.info(f"Account updated: id={account.id}")
        return await self.get_account(account.id, user_id)

    async def delete_account(self, account_id: int, user_id: int) -> None:
        """Baja lógica; se bloquea con movimientos o subcuentas"""
        account = await self.get_account(account_id, user_id)

        line_count = await self.repository.count_entry_lines(account_id)
        if line_count > 0:
            raise BusinessRuleError(
                f"Cannot delete account with {line_count} journal entry lines. You can deactivate it instead.",
                "HAS_JOURNAL_ENTRIES"
            )

        subaccount_count = await self.repository.count_subaccounts(account_id)
        if subaccount_count > 0:
            raise BusinessRuleError(
                f"Cannot delete account with {subaccount_count} subaccounts. Delete or reassign subaccounts first.",
                "HAS_SUBACCOUNTS"
            )

        await self.repository.soft_delete(account)
        await self.db.commit()
        logger.info(f"Account deactivated: id={account_id}")
