# storefront/utils/money.py
from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

_SEPARATORS = (",", " ", "\u00a0", "_")


def parse_price(value) -> Decimal:
    """
    Cena wyswietlana jako string ("45,000", "1 200.50") -> Decimal.
    Niepoprawna cena liczy sie jako 0, nigdy nie rzuca wyjatku.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, bool):
        return ZERO
    if isinstance(value, int):
        return Decimal(value)

    text = str(value).strip()
    for sep in _SEPARATORS:
        text = text.replace(sep, "")

    try:
        price = Decimal(text)
    except (InvalidOperation, ValueError):
        return ZERO

    if not price.is_finite():
        return ZERO
    return price


def format_price(amount: Decimal) -> str:
    """45000 -> "45,000", 1200.5 -> "1,200.5" (max 2 miejsca po przecinku)."""
    quantized = amount.quantize(Decimal("0.01"))
    if quantized == quantized.to_integral_value():
        return f"{quantized:,.0f}"
    return f"{quantized:,.2f}".rstrip("0")
