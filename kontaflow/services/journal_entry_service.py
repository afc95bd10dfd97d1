"""
Servicio interno de asientos contables (partida doble)

No se expone por HTTP: lo usan el script de datos de ejemplo y los tests
para registrar asientos sobre los que operan cierres y bajas.
"""
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kontaflow.models.account import Account
from kontaflow.models.chart_of_accounts import ChartOfAccounts
from kontaflow.models.company import Company
from kontaflow.models.economic_group import AccountingConfiguration
from kontaflow.models.journal_entry import EntryLine, EntryStatus, JournalEntry
from kontaflow.repositories.accounting_period import AccountingPeriodRepository
from kontaflow.schemas.journal_entry import EntryLineInput, JournalEntryInput
from kontaflow.services.economic_group_service import ensure_group_access
from kontaflow.utils.exceptions import BusinessRuleError, NotFoundError
from kontaflow.utils.logging import get_logger

logger = get_logger(__name__)


def entry_totals(lines: Iterable) -> Tuple[Decimal, Decimal]:
    """Suma de débitos y créditos de un conjunto de líneas"""
    total_debit = Decimal("0")
    total_credit = Decimal("0")
    for line in lines:
        total_debit += Decimal(line.debit or 0)
        total_credit += Decimal(line.credit or 0)
    return total_debit, total_credit


def validate_balance(lines: Iterable) -> None:
    """
    Verifica que el asiento esté balanceado (débitos == créditos).

    Raises:
        BusinessRuleError: UNBALANCED_ENTRY con la diferencia encontrada
    """
    total_debit, total_credit = entry_totals(lines)
    if total_debit != total_credit:
        raise BusinessRuleError(
            f"Journal entry is unbalanced: debits {total_debit} != credits {total_credit}",
            "UNBALANCED_ENTRY"
        )


class JournalEntryService:
    """Alta en borrador y confirmación de asientos"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.periods = AccountingPeriodRepository(db)

    async def _get_configuration(self, group_id: int) -> Optional[AccountingConfiguration]:
        return await self.db.scalar(
            select(AccountingConfiguration).where(AccountingConfiguration.economic_group_id == group_id)
        )

    async def _next_number(self, company_id: int) -> int:
        last = await self.db.scalar(
            select(func.max(JournalEntry.number)).where(JournalEntry.company_id == company_id)
        )
        return (last or 0) + 1

    async def _build_line(self, chart_id: Optional[int], line: EntryLineInput) -> EntryLine:
        account = await self.db.get(Account, line.account_id)
        if account is None:
            raise NotFoundError("Account", line.account_id)
        if account.chart_of_accounts_id != chart_id:
            raise BusinessRuleError(
                "Account must belong to the economic group's chart of accounts",
                "INVALID_ACCOUNT_CHART"
            )
        if not account.postable or not account.active:
            raise BusinessRuleError(
                f"Account {account.code} does not accept postings",
                "ACCOUNT_NOT_POSTABLE"
            )
        if account.requires_auxiliary and line.auxiliary_id is None:
            raise BusinessRuleError(
                f"Account {account.code} requires an auxiliary reference",
                "MISSING_AUXILIARY"
            )

        return EntryLine(
            account_id=account.id,
            debit=line.debit,
            credit=line.credit,
            currency=line.currency,
            exchange_rate=line.exchange_rate,
            auxiliary_type=line.auxiliary_type or account.auxiliary_type,
            auxiliary_id=line.auxiliary_id,
            account_code=account.code,
            account_name=account.name,
            account_type=account.type,
            note=line.note
        )

    async def get_entry(self, entry_id: int) -> JournalEntry:
        entry = await self.db.scalar(
            select(JournalEntry)
            .options(selectinload(JournalEntry.lines))
            .where(JournalEntry.id == entry_id)
            .execution_options(populate_existing=True)
        )
        if entry is None:
            raise NotFoundError("Journal Entry", entry_id)
        return entry

    async def create_draft(self, data: JournalEntryInput, user_id: int) -> JournalEntry:
        """Registra un asiento en DRAFT; el balance se exige al confirmar"""
        company = await self.db.get(Company, data.company_id)
        if company is None:
            raise NotFoundError("Company", data.company_id)
        await ensure_group_access(self.db, company.economic_group_id, user_id, "You do not have access to this company")

        chart_id = await self.db.scalar(
            select(ChartOfAccounts.id).where(ChartOfAccounts.economic_group_id == company.economic_group_id)
        )
        lines = [await self._build_line(chart_id, line) for line in data.lines]

        entry = JournalEntry(
            economic_group_id=company.economic_group_id,
            company_id=company.id,
            number=await self._next_number(company.id),
            date=data.date,
            description=data.description,
            type=data.type,
            status=EntryStatus.DRAFT,
            created_by=user_id,
            lines=lines
        )
        self.db.add(entry)
        await self.db.commit()

        logger.info(f"Journal entry drafted: id={entry.id} company={company.id} number={entry.number}")
        return await self.get_entry(entry.id)

    async def confirm(self, entry_id: int) -> JournalEntry:
        """
        Confirma un asiento en borrador o pendiente de aprobación.

        Rechaza asientos desbalanceados y fechados en un período cerrado,
        salvo que la configuración del grupo lo permita.
        """
        entry = await self.get_entry(entry_id)

        if entry.status not in (EntryStatus.DRAFT, EntryStatus.PENDING_APPROVAL):
            raise BusinessRuleError(
                f"Only DRAFT or PENDING_APPROVAL entries can be confirmed (current: {entry.status.value})",
                "INVALID_ENTRY_STATUS"
            )

        configuration = await self._get_configuration(entry.economic_group_id)
        allow_unbalanced = configuration is not None and configuration.allow_unbalanced_entries
        allow_closed = configuration is not None and configuration.allow_entries_in_closed_period

        if not allow_unbalanced:
            validate_balance(entry.lines)

        if not allow_closed:
            closed_period = await self.periods.find_closed_for_date(entry.economic_group_id, entry.date)
            if closed_period is not None:
                raise BusinessRuleError(
                    f"Entry date {entry.date} falls in a closed accounting period",
                    "CLOSED_PERIOD"
                )

        entry.status = EntryStatus.CONFIRMED
        await self.db.commit()

        logger.info(f"Journal entry confirmed: id={entry.id}")
        return await self.get_entry(entry.id)
