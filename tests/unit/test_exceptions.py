"""
Tests unitarios de las excepciones de la aplicación
"""
import pytest
from sqlalchemy.exc import IntegrityError

from kontaflow.utils.exceptions import (
    BusinessRuleError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
    translate_integrity_error,
)


class FakeDriverError(Exception):
    """Error del driver con el sqlstate que expone asyncpg"""

    def __init__(self, message: str, sqlstate: str = None):
        super().__init__(message)
        self.sqlstate = sqlstate


def integrity_error(message: str, sqlstate: str = None) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, FakeDriverError(message, sqlstate))


@pytest.mark.unit
class TestErrorPayloads:

    def test_not_found_message(self):
        assert NotFoundError("Company", 7).message == "Company with id 7 not found"
        assert NotFoundError("User-Company permission").message == "User-Company permission not found"

    def test_business_rule_payload(self):
        error = BusinessRuleError("Period already closed", "ALREADY_CLOSED")

        assert error.status_code == 422
        assert error.to_payload() == {
            "code": "BUSINESS_RULE_VIOLATION",
            "message": "Period already closed",
            "rule": "ALREADY_CLOSED"
        }

    def test_business_rule_without_rule(self):
        assert "rule" not in BusinessRuleError("Name too short").to_payload()

    def test_validation_payload(self):
        error = ValidationError("Invalid", details={"name": ["Too short"]})

        assert error.status_code == 400
        assert error.to_payload() == {
            "code": "VALIDATION_ERROR",
            "message": "Invalid",
            "details": {"name": ["Too short"]}
        }

    def test_conflict_payload(self):
        payload = ConflictError("Duplicated", "rut").to_payload()

        assert payload == {"code": "CONFLICT", "message": "Duplicated", "field": "rut"}


@pytest.mark.unit
class TestTranslateIntegrityError:

    def test_postgres_unique_violation_maps_to_rule(self):
        error = translate_integrity_error(integrity_error(
            'duplicate key value violates unique constraint "uq_companies_economic_group_id_rut"\n'
            "DETAIL:  Key (economic_group_id, rut)=(1, 217654320018) already exists.",
            "23505"
        ))

        assert isinstance(error, BusinessRuleError)
        assert error.status_code == 422
        assert error.rule == "DUPLICATE_RUT"

    def test_sqlite_composite_key_maps_to_rule(self):
        error = translate_integrity_error(
            integrity_error("UNIQUE constraint failed: accounts.chart_of_accounts_id, accounts.code")
        )

        assert isinstance(error, BusinessRuleError)
        assert error.rule == "DUPLICATE_CODE"
        assert error.message == "An account with this code already exists in this chart of accounts"

    def test_sqlite_expression_index_maps_to_rule(self):
        error = translate_integrity_error(
            integrity_error("UNIQUE constraint failed: index 'uq_suppliers_economic_group_id_lower_name'")
        )

        assert isinstance(error, BusinessRuleError)
        assert error.rule == "DUPLICATE_SUPPLIER_NAME"

    def test_sqlite_fiscal_year_index_maps_to_rule(self):
        error = translate_integrity_error(integrity_error(
            "UNIQUE constraint failed: accounting_periods.economic_group_id, accounting_periods.fiscal_year"
        ))

        assert error.rule == "DUPLICATE_PERIOD"

    def test_postgres_truncated_name_matches_by_columns(self):
        error = translate_integrity_error(integrity_error(
            'duplicate key value violates unique constraint "uq_exchange_rates_economic_group_id_date_sou_5f2a"\n'
            "DETAIL:  Key (economic_group_id, date, source_currency, target_currency)"
            "=(1, 2024-05-02, USD, UYU) already exists.",
            "23505"
        ))

        assert error.rule == "DUPLICATE_EXCHANGE_RATE"

    def test_user_company_pair_stays_conflict(self):
        error = translate_integrity_error(integrity_error(
            "UNIQUE constraint failed: user_companies.user_id, user_companies.company_id"
        ))

        assert isinstance(error, ConflictError)
        assert error.field == "userId_companyId"

    def test_unknown_key_names_distinguishing_column(self):
        error = translate_integrity_error(integrity_error(
            "UNIQUE constraint failed: user_groups.user_id, user_groups.economic_group_id"
        ))

        assert isinstance(error, ConflictError)
        assert error.field == "economicGroupId"
        assert error.message == "A record with that economicGroupId already exists"

    def test_sqlite_unique_violation(self):
        error = translate_integrity_error(
            integrity_error("UNIQUE constraint failed: charts_of_accounts.economic_group_id")
        )

        assert isinstance(error, ConflictError)
        assert error.status_code == 409
        assert error.field == "economicGroupId"

    def test_foreign_key_violation(self):
        error = translate_integrity_error(integrity_error("FOREIGN KEY constraint failed"))

        assert isinstance(error, BusinessRuleError)
        assert error.status_code == 422

    def test_postgres_foreign_key_by_sqlstate(self):
        error = translate_integrity_error(integrity_error("insert or update violates ...", "23503"))

        assert isinstance(error, BusinessRuleError)

    def test_other_violations(self):
        error = translate_integrity_error(integrity_error("NOT NULL constraint failed: users.email"))

        assert isinstance(error, DatabaseError)
        assert error.status_code == 500
