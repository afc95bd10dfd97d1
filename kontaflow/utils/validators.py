import re
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from email_validator import EmailNotValidError, validate_email


class Country(str, Enum):
    """Países soportados para grupos económicos y empresas"""
    UY = "UY"
    AR = "AR"
    BR = "BR"
    CL = "CL"
    CO = "CO"
    PE = "PE"
    MX = "MX"
    US = "US"
    ES = "ES"


class CurrencyCode(str, Enum):
    """Monedas base/funcionales admitidas"""
    UYU = "UYU"
    USD = "USD"
    ARS = "ARS"
    BRL = "BRL"
    CLP = "CLP"
    COP = "COP"
    PEN = "PEN"
    MXN = "MXN"
    EUR = "EUR"


# Monedas permitidas por país
COUNTRY_CURRENCIES: Dict[str, List[str]] = {
    "UY": ["UYU", "USD"],
    "AR": ["ARS", "USD"],
    "BR": ["BRL", "USD"],
    "CL": ["CLP", "USD"],
    "CO": ["COP", "USD"],
    "PE": ["PEN", "USD"],
    "MX": ["MXN", "USD"],
    "US": ["USD"],
    "ES": ["EUR", "USD"],
}

ACCOUNT_CODE_PATTERN = re.compile(r"^[0-9.]+$")
CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")
UY_RUT_PATTERN = re.compile(r"^\d{12}$")


def _value(item) -> str:
    return item.value if isinstance(item, Enum) else str(item)


def is_currency_valid_for_country(country, currency) -> bool:
    """Valida que la moneda esté en la lista blanca del país"""
    return _value(currency) in COUNTRY_CURRENCIES.get(_value(country), [])


def is_valid_rut(country, rut: str) -> bool:
    """
    Valida el formato del identificador fiscal según el país.

    Uruguay exige 12 dígitos; el resto de países sólo exige el largo
    validado por el esquema.
    """
    if _value(country) == Country.UY.value:
        return bool(UY_RUT_PATTERN.match(rut))
    return True


def is_valid_account_code(code: str) -> bool:
    """Los códigos de cuenta sólo admiten dígitos y puntos"""
    return bool(ACCOUNT_CODE_PATTERN.match(code))


def is_valid_email(email: Optional[str]) -> bool:
    """Valida el formato de un email usando email-validator"""
    if not email:
        return True
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_future_date(value: date, today: Optional[date] = None) -> bool:
    return value > (today or date.today())
