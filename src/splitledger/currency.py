"""Currency metadata and money formatting for minor-unit amounts."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from .exceptions import UnknownCurrencyError
from .splits import round_half_up


class CurrencyInfo(BaseModel):
    """Display metadata for a currency."""

    model_config = ConfigDict(frozen=True)

    code: str
    symbol: str
    name: str
    decimals: int = 2


def _currency(code: str, symbol: str, name: str, decimals: int = 2) -> CurrencyInfo:
    return CurrencyInfo(code=code, symbol=symbol, name=name, decimals=decimals)


CURRENCIES: dict[str, CurrencyInfo] = {
    c.code: c
    for c in [
        _currency("USD", "$", "US Dollar"),
        _currency("EUR", "€", "Euro"),
        _currency("GBP", "£", "British Pound"),
        _currency("CAD", "C$", "Canadian Dollar"),
        _currency("AUD", "A$", "Australian Dollar"),
        _currency("JPY", "¥", "Japanese Yen", decimals=0),
        _currency("INR", "₹", "Indian Rupee"),
        _currency("CHF", "CHF", "Swiss Franc"),
        _currency("CNY", "¥", "Chinese Yuan"),
        _currency("MXN", "MX$", "Mexican Peso"),
        _currency("BRL", "R$", "Brazilian Real"),
        _currency("KRW", "₩", "South Korean Won", decimals=0),
        _currency("SEK", "kr", "Swedish Krona"),
        _currency("NOK", "kr", "Norwegian Krone"),
        _currency("DKK", "kr", "Danish Krone"),
        _currency("PLN", "zł", "Polish Zloty"),
        _currency("THB", "฿", "Thai Baht"),
        _currency("SGD", "S$", "Singapore Dollar"),
        _currency("HKD", "HK$", "Hong Kong Dollar"),
        _currency("NZD", "NZ$", "New Zealand Dollar"),
        _currency("ZAR", "R", "South African Rand"),
        _currency("TRY", "₺", "Turkish Lira"),
        _currency("AED", "AED", "UAE Dirham"),
        _currency("SAR", "SAR", "Saudi Riyal"),
        _currency("PHP", "₱", "Philippine Peso"),
        _currency("COP", "COL$", "Colombian Peso"),
        _currency("EGP", "E£", "Egyptian Pound"),
    ]
}

# Used by format_money for codes missing from the table
FALLBACK_CURRENCY = CURRENCIES["USD"]


def get_currency(code: str) -> CurrencyInfo:
    """
    Look up a currency by ISO code.

    Raises:
        UnknownCurrencyError: If the code is not in CURRENCIES
    """
    try:
        return CURRENCIES[code.upper()]
    except KeyError:
        raise UnknownCurrencyError(code) from None


def get_currency_symbol(code: str) -> str:
    """Symbol for a currency code, or the code itself if unknown."""
    info = CURRENCIES.get(code.upper())
    return info.symbol if info else code


def to_major_units(minor_units: int) -> Decimal:
    """Convert integer cents to an exact Decimal amount (1234 -> 12.34)."""
    return Decimal(minor_units) / Decimal(100)


def format_money(minor_units: int, currency_code: str) -> str:
    """
    Format an amount in minor units for display.

    Amounts are always stored as hundredths of the currency unit. Zero-decimal
    currencies (JPY, KRW) are rounded half-up to a whole unit. Unknown codes
    format as dollars.

    Examples:
        format_money(123456, "USD") -> "$1234.56"
        format_money(-500, "EUR")   -> "-€5.00"
        format_money(15050, "JPY")  -> "¥151"

    Args:
        minor_units: Amount in cents
        currency_code: ISO currency code

    Returns:
        Symbol followed by the amount, with a leading "-" if negative
    """
    info = CURRENCIES.get(currency_code.upper(), FALLBACK_CURRENCY)
    sign = "-" if minor_units < 0 else ""
    major = to_major_units(abs(minor_units))

    if info.decimals == 0:
        return f"{sign}{info.symbol}{round_half_up(major)}"
    return f"{sign}{info.symbol}{major:.{info.decimals}f}"
