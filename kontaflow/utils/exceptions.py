import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

from fastapi import status
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError


class AppError(Exception):
    """Base exception for KontaFlow; carries HTTP status and machine-readable code"""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        code: str = "INTERNAL_ERROR"
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.message} (Code: {self.code})"

    def to_payload(self) -> Dict[str, Any]:
        """Cuerpo del sobre de error {error: {...}}"""
        return {"code": self.code, "message": self.message}


class ValidationError(AppError):
    """Input data does not satisfy the schema (400)"""
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, List[str]]] = None,
        rule: Optional[str] = None
    ):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR")
        self.details = details
        self.rule = rule

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.details:
            payload["details"] = self.details
        if self.rule:
            payload["rule"] = self.rule
        return payload


class UnauthorizedError(AppError):
    """Missing or invalid caller identity (401)"""
    def __init__(self, message: str = "You must log in to continue"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED")


class ForbiddenError(AppError):
    """Caller lacks group membership or role (403)"""
    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message, status.HTTP_403_FORBIDDEN, "FORBIDDEN")


class NotFoundError(AppError):
    """Generic not found error (404)"""
    def __init__(self, resource: str, identifier: Optional[Union[int, str]] = None):
        if identifier is not None:
            message = f"{resource} with id {identifier} not found"
        else:
            message = f"{resource} not found"
        super().__init__(message, status.HTTP_404_NOT_FOUND, "NOT_FOUND")
        self.resource = resource
        self.identifier = identifier


class ConflictError(AppError):
    """Unique resource collision (409)"""
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, "CONFLICT")
        self.field = field

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.field:
            payload["field"] = self.field
        return payload


class BusinessRuleError(AppError):
    """A named domain rule was violated (422)"""
    def __init__(self, message: str, rule: Optional[str] = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, "BUSINESS_RULE_VIOLATION")
        self.rule = rule

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.rule:
            payload["rule"] = self.rule
        return payload


class DatabaseError(AppError):
    """Unclassified persistence failure (500)"""
    def __init__(self, message: str = "Database error"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, "DATABASE_ERROR")


# ====================
# Traducción de errores de integridad
# ====================

_UNIQUE_SQLSTATE = "23505"
_FOREIGN_KEY_SQLSTATE = "23503"

# PostgreSQL: 'duplicate key value violates unique constraint "uq_companies_economic_group_id_rut"'
_PG_CONSTRAINT_PATTERN = re.compile(r'unique constraint "([^"]+)"')
# PostgreSQL: 'Key (economic_group_id, rut)=(1, 2178...) already exists.'
_PG_KEY_PATTERN = re.compile(r"Key \(([^)]+)\)=")
# SQLite: "UNIQUE constraint failed: index 'uq_customers_economic_group_id_lower_name'"
_SQLITE_INDEX_PATTERN = re.compile(r"UNIQUE constraint failed: index '([^']+)'")
# SQLite: 'UNIQUE constraint failed: companies.economic_group_id, companies.rut'
_SQLITE_COLUMNS_PATTERN = re.compile(r"UNIQUE constraint failed: ([\w.]+(?:, [\w.]+)*)")


class UniqueKey(NamedTuple):
    """Restricción única y el error de la verificación que la precede"""
    name: str
    table: str
    columns: Tuple[str, ...]
    build: Callable[[], AppError]


UNIQUE_KEYS: List[UniqueKey] = [
    UniqueKey(
        "uq_accounts_chart_of_accounts_id_code", "accounts", ("chart_of_accounts_id", "code"),
        lambda: BusinessRuleError(
            "An account with this code already exists in this chart of accounts", "DUPLICATE_CODE"
        )
    ),
    UniqueKey(
        "uq_companies_economic_group_id_rut", "companies", ("economic_group_id", "rut"),
        lambda: BusinessRuleError(
            "A company with this RUT already exists in this economic group", "DUPLICATE_RUT"
        )
    ),
    UniqueKey(
        "uq_accounting_periods_economic_group_id_type_fiscal_year_month", "accounting_periods",
        ("economic_group_id", "type", "fiscal_year", "month"),
        lambda: BusinessRuleError(
            "An accounting period for this month already exists in this economic group", "DUPLICATE_PERIOD"
        )
    ),
    UniqueKey(
        "uq_accounting_periods_fiscal_year", "accounting_periods", ("economic_group_id", "fiscal_year"),
        lambda: BusinessRuleError(
            "An accounting period for this fiscal year already exists in this economic group", "DUPLICATE_PERIOD"
        )
    ),
    UniqueKey(
        "uq_exchange_rates_economic_group_id_date_source_currency_target_currency", "exchange_rates",
        ("economic_group_id", "date", "source_currency", "target_currency"),
        lambda: BusinessRuleError(
            "An exchange rate for this date and currency pair already exists", "DUPLICATE_EXCHANGE_RATE"
        )
    ),
    UniqueKey(
        "uq_customers_economic_group_id_lower_name", "customers", (),
        lambda: BusinessRuleError(
            "A customer with this name already exists in the economic group", "DUPLICATE_CUSTOMER_NAME"
        )
    ),
    UniqueKey(
        "uq_suppliers_economic_group_id_lower_name", "suppliers", (),
        lambda: BusinessRuleError(
            "A supplier with this name already exists in the economic group", "DUPLICATE_SUPPLIER_NAME"
        )
    ),
    UniqueKey(
        "uq_charts_of_accounts_economic_group_id", "charts_of_accounts", ("economic_group_id",),
        lambda: ConflictError("Economic Group already has a Chart of Accounts", "economicGroupId")
    ),
    UniqueKey(
        "uq_user_companies_user_id_company_id", "user_companies", ("user_id", "company_id"),
        lambda: ConflictError(
            "User already has access to this company. Use update to modify permissions.", "userId_companyId"
        )
    ),
    UniqueKey(
        "pk_currencies", "currencies", ("code",),
        lambda: ConflictError("Currency with this code already exists", "code")
    ),
]


def _sqlstate(error: IntegrityError) -> Optional[str]:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _violated_key(message: str) -> Tuple[Optional[str], Optional[str], Tuple[str, ...]]:
    """Nombre de la restricción, tabla y columnas según el mensaje del driver"""
    name: Optional[str] = None
    table: Optional[str] = None
    columns: Tuple[str, ...] = ()

    match = _PG_CONSTRAINT_PATTERN.search(message) or _SQLITE_INDEX_PATTERN.search(message)
    if match:
        name = match.group(1)

    match = _PG_KEY_PATTERN.search(message)
    if match:
        columns = tuple(column.strip() for column in match.group(1).split(","))
    elif name is None:
        match = _SQLITE_COLUMNS_PATTERN.search(message)
        if match:
            qualified = [column.strip() for column in match.group(1).split(",")]
            table = qualified[0].split(".")[0]
            columns = tuple(column.split(".")[-1] for column in qualified)

    return name, table, columns


def _find_unique_key(name: Optional[str], table: Optional[str], columns: Tuple[str, ...]) -> Optional[UniqueKey]:
    for key in UNIQUE_KEYS:
        if name is not None and name == key.name:
            return key
    # PostgreSQL recorta los identificadores largos; se compara por columnas
    for key in UNIQUE_KEYS:
        if columns and columns == key.columns and table in (None, key.table):
            return key
    return None


def translate_integrity_error(error: IntegrityError) -> AppError:
    """
    Convierte una violación de restricción de la base de datos en el mismo
    error tipado que produce la verificación explícita del servicio.

    Las claves sin verificación propia terminan en un 409 genérico que
    nombra la columna que distingue el registro (la última de la clave).
    """
    message = str(error.orig)
    state = _sqlstate(error)

    if state == _UNIQUE_SQLSTATE or "UNIQUE constraint failed" in message:
        name, table, columns = _violated_key(message)
        key = _find_unique_key(name, table, columns)
        if key is not None:
            return key.build()
        field = to_camel(columns[-1]) if columns else "field"
        return ConflictError(f"A record with that {field} already exists", field)

    if state == _FOREIGN_KEY_SQLSTATE or "FOREIGN KEY constraint failed" in message:
        return BusinessRuleError(
            "Cannot complete the operation due to relationships with other records"
        )

    return DatabaseError()
