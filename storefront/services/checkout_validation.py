# storefront/services/checkout_validation.py
import re
from typing import Iterable, List, NamedTuple

from storefront.domain.errors import ValidationError
from storefront.domain.schemas import (
    CartLineItem,
    CheckoutContactInfo,
    CurrentUser,
    OrderItemIn,
    OrderRequest,
    PaymentMethod,
)
from storefront.utils.settings import PLACEHOLDER_EMAIL

PHONE_DIGITS = 12

REQUIRED_FIELDS = ("first_name", "last_name", "phone", "address", "city", "region")

#pola z profilu zalogowanego uzytkownika, nieedytowalne w formularzu
LOCKED_FIELDS = ("first_name", "last_name", "email", "phone")

_NON_DIGITS = re.compile(r"\D")


class ValidationResult(NamedTuple):
    ok: bool
    error: str | None = None


def normalize_phone(phone: str | None) -> str:
    return _NON_DIGITS.sub("", phone or "")


def validate_checkout(contact: CheckoutContactInfo, items: Iterable[CartLineItem]) -> ValidationResult:
    """
    Kolejnosc ma znaczenie, uzytkownik widzi tylko pierwszy blad:
    1. wymagane pola  2. telefon = 12 cyfr  3. niepusty koszyk
    """
    for field in REQUIRED_FIELDS:
        value = getattr(contact, field) or ""
        if not value.strip():
            return ValidationResult(False, ValidationError.MISSING_REQUIRED_FIELDS)

    if len(normalize_phone(contact.phone)) != PHONE_DIGITS:
        return ValidationResult(False, ValidationError.INVALID_PHONE)

    if not list(items):
        return ValidationResult(False, ValidationError.EMPTY_CART)

    return ValidationResult(True)


def ensure_valid(contact: CheckoutContactInfo, items: Iterable[CartLineItem]) -> None:
    result = validate_checkout(contact, items)
    if not result.ok:
        raise ValidationError(result.error)


def prefill_contact(contact: CheckoutContactInfo, user: CurrentUser | None) -> CheckoutContactInfo:
    """Nadpisuje imie, nazwisko, email i telefon danymi z profilu."""
    if user is None:
        return contact

    return contact.model_copy(
        update={
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
            "phone": user.phone,
        }
    )


def apply_edits(contact: CheckoutContactInfo, edits: dict, authenticated: bool) -> CheckoutContactInfo:
    if authenticated:
        edits = {k: v for k, v in edits.items() if k not in LOCKED_FIELDS}
    return contact.model_copy(update=edits)


def build_order_request(
    contact: CheckoutContactInfo,
    items: List[CartLineItem],
    payment_method: PaymentMethod = PaymentMethod.CASH,
) -> OrderRequest:
    """Zakladamy ze kontakt przeszedl validate_checkout."""
    notes = (contact.notes or "").strip() or None

    return OrderRequest(
        first_name=contact.first_name.strip(),
        last_name=contact.last_name.strip(),
        #backend wymaga emaila, brak -> placeholder
        email=(contact.email or "").strip() or PLACEHOLDER_EMAIL,
        phone=f"+{normalize_phone(contact.phone)}",
        address=contact.address.strip(),
        city=contact.city.strip(),
        region=contact.region.strip(),
        payment_method=payment_method,
        notes=notes,
        items=[OrderItemIn(product_id=i.product_id, quantity=i.quantity) for i in items],
    )
