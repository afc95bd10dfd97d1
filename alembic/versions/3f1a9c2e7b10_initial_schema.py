"""initial_schema

Revision ID: 3f1a9c2e7b10
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Tipos enumerados compartidos entre tablas; se crean una sola vez
ENUMS = {
    'user_role': ('ADMIN', 'ACCOUNTANT', 'OPERATOR'),
    'account_type': ('ASSET', 'LIABILITY', 'EQUITY', 'INCOME', 'EXPENSE'),
    'auxiliary_type': ('CUSTOMER', 'SUPPLIER', 'EMPLOYEE', 'OTHER'),
    'account_currency': ('MN', 'USD', 'BOTH', 'FUNCTIONAL'),
    'account_nature': ('CURRENT', 'NON_CURRENT'),
    'ifrs_category': (
        'CASH_AND_EQUIVALENTS', 'ACCOUNTS_RECEIVABLE', 'INVENTORIES', 'PROPERTY_PLANT_EQUIPMENT',
        'INTANGIBLE_ASSETS', 'FINANCIAL_INVESTMENTS', 'ACCOUNTS_PAYABLE', 'FINANCIAL_DEBT',
        'TAX_LIABILITIES', 'EMPLOYEE_BENEFITS', 'PROVISIONS', 'SHARE_CAPITAL', 'RESERVES',
        'RETAINED_EARNINGS', 'OPERATING_INCOME', 'OTHER_INCOME', 'FINANCIAL_INCOME', 'COST_OF_SALES',
        'ADMINISTRATIVE_EXPENSES', 'SELLING_EXPENSES', 'FINANCIAL_EXPENSES', 'INCOME_TAX'
    ),
    'valuation_method': ('HISTORICAL_COST', 'FAIR_VALUE', 'AMORTIZED_COST', 'NET_REALIZABLE_VALUE'),
    'period_type': ('FISCAL_YEAR', 'MONTH'),
    'entry_type': ('OPENING', 'JOURNAL', 'ADJUSTMENT', 'CLOSING'),
    'entry_status': ('DRAFT', 'PENDING_APPROVAL', 'CONFIRMED', 'REVERSED', 'CANCELLED'),
    'obligation_type': ('RECEIVABLE', 'PAYABLE'),
    'obligation_status': ('ACTIVE', 'PAID', 'CANCELLED'),
    'installment_status': ('PENDING', 'PARTIAL', 'PAID', 'OVERDUE'),
}


def enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    # Usuarios y grupos económicos
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users'))
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'economic_groups',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('main_country', sa.String(length=2), nullable=False, comment='ISO 3166-1 alpha-2'),
        sa.Column('base_currency', sa.String(length=3), nullable=False, comment='ISO 4217'),
        sa.Column('active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_economic_groups'))
    )

    op.create_table(
        'user_groups',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('economic_group_id', sa.Integer(), nullable=False),
        sa.Column('role', enum('user_role'), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_user_groups_user_id_users'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['economic_group_id'], ['economic_groups.id'],
            name=op.f('fk_user_groups_economic_group_id_economic_groups'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_groups')),
        sa.UniqueConstraint('user_id', 'economic_group_id', name=op.f('uq_user_groups_user_id_economic_group_id'))
    )
    op.create_index(op.f('ix_user_groups_user_id'), 'user_groups', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_groups_economic_group_id'), 'user_groups', ['economic_group_id'], unique=False)

    op.create_table(
        'accounting_configurations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('economic_group_id', sa.Integer(), nullable=False),
        sa.Column('allow_entries_in_closed_period', sa.Boolean(), nullable=False),
        sa.Column('require_global_approval', sa.Boolean(), nullable=False),
        sa.Column('minimum_approval_amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('allow_unbalanced_entries', sa.Boolean(), nullable=False),
        sa.Column('amount_decimals', sa.Integer(), nullable=False),
        sa.Column('exchange_rate_decimals', sa.Integer(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['economic_group_id'], ['economic_groups.id'],
            name=op.f('fk_accounting_configurations_economic_group_id_economic_groups'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_accounting_configurations')),
        sa.UniqueConstraint('economic_group_id', name=op.f('uq_accounting_configurations_economic_group_id'))
    )

    # Catálogo de monedas
    op.create_table(
        'currencies',
        sa.Column('code', sa.String(length=3), nullable=False, comment='Código ISO 4217 de la moneda (USD, EUR, etc.)'),
        sa.Column('name', sa.String(length=100), nullable=False, comment='Nombre completo de la moneda'),
        sa.Column('symbol', sa.String(length=10), nullable=True, comment='Símbolo de la moneda ($, €, etc.)'),
        sa.Column('decimals', sa.Integer(), nullable=False, comment='Número de decimales para esta moneda'),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column(
            'is_default_functional', sa.Boolean(), nullable=False,
            comment='Moneda funcional sugerida para nuevas empresas'
        ),
        *timestamps(),
        sa.PrimaryKeyConstraint('code', name=op.f('pk_currencies'))
    )

    # Empresas
    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('economic_group_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('trade_name', sa.String(length=200), nullable=True),
        sa.Column('rut', sa.String(length=20), nullable=False, comment='Identificador fiscal'),
        sa.Column('country', sa.String(length=2), nullable=False),
        sa.Column('functional_currency', sa.String(length=3), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['economic_group_id'], ['economic_groups.id'],
            name=op.f('fk_companies_economic_group_id_economic_groups')
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_companies')),
        sa.UniqueConstraint('economic_group_id', 'rut', name=op.f('uq_companies_economic_group_id_rut'))
    )
    op.create_index(op.f('ix_companies_economic_group_id'), 'companies', ['economic_group_id'], unique=False)

    # Plan de cuentas y cuentas
    op.create_table(
        'charts_of_accounts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('economic_group_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['economic_group_id'], ['economic_groups.id'],
            name=op.f('fk_charts_of_accounts_economic_group_id_economic_groups')
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_charts_of_accounts')),
        sa.UniqueConstraint('economic_group_id', name=op.f('uq_charts_of_accounts_economic_group_id'))
    )

    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('chart_of_accounts_id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('parent_account_id', sa.Integer(), nullable=True),
        sa.Column('type', enum('account_type'), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('postable', sa.Boolean(), nullable=False),
        sa.Column('requires_auxiliary', sa.Boolean(), nullable=False),
        sa.Column('auxiliary_type', enum('auxiliary_type'), nullable=True),
        sa.Column('currency', enum('account_currency'), nullable=False),
        sa.Column('nature', enum('account_nature'), nullable=True),
        sa.Column('ifrs_category', enum('ifrs_category'), nullable=True),
        sa.Column('valuation_method', enum('valuation_method'), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['chart_of_accounts_id'], ['charts_of_accounts.id'],
            name=op.f('fk_accounts_chart_of_accounts_id_charts_of_accounts')
        ),
        sa.ForeignKeyConstraint(
            ['parent_account_id'], ['accounts.id'],
            name=op.f('fk_accounts_parent_account_id_accounts')
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_accounts')),
        sa.UniqueConstraint('chart_of_accounts_id', 'code', name=op.f('uq_accounts_chart_of_accounts_id_code'))
    )
    op.create_index(op.f('ix_accounts_chart_of_accounts_id'), 'accounts', ['chart_of_accounts_id'], unique=False)
    op.create_index(op.f('ix_accounts_parent_account_id'), 'accounts', ['parent_account_id'], unique=False)

    # Periodos contables
    op.create_table(
        'accounting_periods',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('economic_group_id', sa.Integer(), nullable=False),
        sa.Column('type', enum('period_type'), nullable=False),
        sa.Column('fiscal_year', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('closed', sa.Boolean(), nullable=False),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('closed_by', sa.Integer(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['economic_group_id'], ['economic_groups.id'],
            name=op.f('fk_accounting_periods_economic_group_id_economic_groups')
        ),
        sa.ForeignKeyConstraint(['closed_by'], ['users.id'], name=op.f('fk_accounting_periods_closed_by_users')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_accounting_periods')),
        sa.UniqueConstraint(
            'economic_group_id', 'type', 'fiscal_year', 'month',
            name=op.f('uq_accounting_periods_economic_group_id_type_fiscal_year_month')
        )
    )
    op.create_index(
        op.f('ix_accounting_periods_economic_group_id'), 'accounting_periods', ['economic_group_id'], unique=False
    )
    op.create_index(
        'uq_accounting_periods_fiscal_year', 'accounting_periods', ['economic_group_id', 'fiscal_year'],
        unique=True, postgresql_where=sa.text("type = 'FISCAL_YEAR'")
    )

    # Terceros (clientes y proveedores comparten columnas)
    for table in ('customers', 'suppliers'):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('economic_group_id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('rut', sa.String(length=50), nullable=True),
            sa.Column('email', sa.String(length=255), nullable=True),
            sa.Column('phone', sa.String(length=50), nullable=True),
            sa.Column('address', sa.String(length=500), nullable=True),
            sa.Column('active', sa.Boolean(), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(
                ['economic_group_id'], ['economic_groups.id'],
                name=op.f(f'fk_{table}_economic_group_id_economic_groups')
            ),
            sa.PrimaryKeyConstraint('id', name=op.f(f'pk_{table}'))
        )
        op.create_index(op.f(f'ix_{table}_economic_group_id'), table, ['economic_group_id'], unique=False)
        op.create_index(
            f'uq_{table}_economic_group_id_lower_name', table,
            [sa.text('economic_group_id'), sa.text('lower(name)')], unique=True
        )

    # Tipos de cambio
    op.create_table(
        'exchange_rates',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('economic_group_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('source_currency', sa.String(length=3), nullable=False),
        sa.Column('target_currency', sa.String(length=3), nullable=False),
        sa.Column('rate', sa.Numeric(precision=18, scale=6), nullable=False),
        sa.Column('source', sa.String(length=100), nullable=True, comment='Fuente de la cotización (BCU, manual...)'),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['economic_group_id'], ['economic_groups.id'],
            name=op.f('fk_exchange_rates_economic_group_id_economic_groups')
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_exchange_rates')),
        sa.UniqueConstraint(
            'economic_group_id', 'date', 'source_currency', 'target_currency',
            name=op.f('uq_exchange_rates_economic_group_id_date_source_currency_target_currency')
        )
    )
    op.create_index(op.f('ix_exchange_rates_economic_group_id'), 'exchange_rates', ['economic_group_id'], unique=False)
    op.create_index(op.f('ix_exchange_rates_date'), 'exchange_rates', ['date'], unique=False)

    # Asientos contables
    op.create_table(
        'journal_entries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('economic_group_id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('type', enum('entry_type'), nullable=False),
        sa.Column('status', enum('entry_status'), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['economic_group_id'], ['economic_groups.id'],
            name=op.f('fk_journal_entries_economic_group_id_economic_groups')
        ),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], name=op.f('fk_journal_entries_company_id_companies')),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], name=op.f('fk_journal_entries_created_by_users')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_journal_entries'))
    )
    op.create_index(
        op.f('ix_journal_entries_economic_group_id'), 'journal_entries', ['economic_group_id'], unique=False
    )
    op.create_index(op.f('ix_journal_entries_company_id'), 'journal_entries', ['company_id'], unique=False)
    op.create_index(op.f('ix_journal_entries_date'), 'journal_entries', ['date'], unique=False)
    op.create_index(op.f('ix_journal_entries_status'), 'journal_entries', ['status'], unique=False)

    op.create_table(
        'entry_lines',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('entry_id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('debit', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('credit', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('exchange_rate', sa.Numeric(precision=18, scale=6), nullable=True),
        sa.Column('auxiliary_type', enum('auxiliary_type'), nullable=True),
        sa.Column('auxiliary_id', sa.Integer(), nullable=True),
        sa.Column('auxiliary_name', sa.String(length=255), nullable=True),
        sa.Column('account_code', sa.String(length=50), nullable=True),
        sa.Column('account_name', sa.String(length=255), nullable=True),
        sa.Column('account_type', enum('account_type'), nullable=True),
        sa.Column('note', sa.String(length=500), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['entry_id'], ['journal_entries.id'],
            name=op.f('fk_entry_lines_entry_id_journal_entries'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], name=op.f('fk_entry_lines_account_id_accounts')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_entry_lines'))
    )
    op.create_index(op.f('ix_entry_lines_entry_id'), 'entry_lines', ['entry_id'], unique=False)
    op.create_index(op.f('ix_entry_lines_account_id'), 'entry_lines', ['account_id'], unique=False)

    # Obligaciones, cuotas y pagos
    op.create_table(
        'obligations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('economic_group_id', sa.Integer(), nullable=False),
        sa.Column('type', enum('obligation_type'), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('total_amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('issue_date', sa.Date(), nullable=False),
        sa.Column('auxiliary_type', enum('auxiliary_type'), nullable=True),
        sa.Column('auxiliary_id', sa.Integer(), nullable=True),
        sa.Column('status', enum('obligation_status'), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['economic_group_id'], ['economic_groups.id'],
            name=op.f('fk_obligations_economic_group_id_economic_groups')
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_obligations'))
    )
    op.create_index(op.f('ix_obligations_economic_group_id'), 'obligations', ['economic_group_id'], unique=False)

    op.create_table(
        'obligation_installments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('obligation_id', sa.Integer(), nullable=False),
        sa.Column('installment_number', sa.Integer(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('paid_amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('status', enum('installment_status'), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['obligation_id'], ['obligations.id'],
            name=op.f('fk_obligation_installments_obligation_id_obligations'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_obligation_installments')),
        sa.UniqueConstraint(
            'obligation_id', 'installment_number',
            name=op.f('uq_obligation_installments_obligation_id_installment_number')
        )
    )
    op.create_index(
        op.f('ix_obligation_installments_obligation_id'), 'obligation_installments', ['obligation_id'], unique=False
    )

    op.create_table(
        'obligation_payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('obligation_id', sa.Integer(), nullable=False),
        sa.Column('installment_id', sa.Integer(), nullable=True),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('exchange_rate', sa.Numeric(precision=18, scale=6), nullable=True),
        sa.Column('notes', sa.String(length=500), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['obligation_id'], ['obligations.id'],
            name=op.f('fk_obligation_payments_obligation_id_obligations'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['installment_id'], ['obligation_installments.id'],
            name=op.f('fk_obligation_payments_installment_id_obligation_installments')
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_obligation_payments'))
    )
    op.create_index(
        op.f('ix_obligation_payments_obligation_id'), 'obligation_payments', ['obligation_id'], unique=False
    )

    # Permisos usuario / empresa
    op.create_table(
        'user_companies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('can_write', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_user_companies_user_id_users'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['company_id'], ['companies.id'],
            name=op.f('fk_user_companies_company_id_companies'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_companies')),
        sa.UniqueConstraint('user_id', 'company_id', name=op.f('uq_user_companies_user_id_company_id'))
    )
    op.create_index(op.f('ix_user_companies_user_id'), 'user_companies', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_companies_company_id'), 'user_companies', ['company_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    # Orden inverso por las claves foráneas
    for table in (
        'user_companies', 'obligation_payments', 'obligation_installments', 'obligations',
        'entry_lines', 'journal_entries', 'exchange_rates', 'suppliers', 'customers',
        'accounting_periods', 'accounts', 'charts_of_accounts', 'companies', 'currencies',
        'accounting_configurations', 'user_groups', 'economic_groups', 'users'
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for name in reversed(list(ENUMS)):
        postgresql.ENUM(name=name).drop(bind, checkfirst=True)
