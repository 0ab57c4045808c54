"""Tests for checkout form validation and order request assembly."""

import pytest

from storefront.domain.errors import ValidationError
from storefront.domain.schemas import PaymentMethod
from storefront.services.checkout_validation import (
    LOCKED_FIELDS,
    apply_edits,
    build_order_request,
    ensure_valid,
    normalize_phone,
    prefill_contact,
    validate_checkout,
)


class TestRequiredFields:
    @pytest.mark.parametrize("field", ["first_name", "last_name", "phone", "address", "city", "region"])
    def test_missing_field(self, contact, product, field):
        result = validate_checkout(contact.model_copy(update={field: "   "}), [product])
        assert result.ok is False
        assert result.error == "missing_required_fields"

    def test_email_and_notes_are_optional(self, contact, product):
        result = validate_checkout(contact.model_copy(update={"email": None, "notes": None}), [product])
        assert result.ok is True

    def test_missing_fields_reported_before_phone_and_cart(self, contact):
        broken = contact.model_copy(update={"city": "", "phone": "123"})
        assert validate_checkout(broken, []).error == "missing_required_fields"


class TestPhone:
    @pytest.mark.parametrize(
        "phone",
        ["+998901234567", "998901234567", "+998 (90) 123-45-67", "+998-90-123-45-67"],
    )
    def test_twelve_digits_pass(self, contact, product, phone):
        assert validate_checkout(contact.model_copy(update={"phone": phone}), [product]).ok

    @pytest.mark.parametrize("phone", ["+99890123456", "+9989012345678", "+998 (90) 123-45-6", "+998123"])
    def test_other_lengths_fail(self, contact, product, phone):
        result = validate_checkout(contact.model_copy(update={"phone": phone}), [product])
        assert result.error == "invalid_phone"

    def test_phone_checked_before_cart(self, contact):
        assert validate_checkout(contact.model_copy(update={"phone": "+998123"}), []).error == "invalid_phone"

    def test_normalize_phone(self):
        assert normalize_phone("+998 (90) 123-45-67") == "998901234567"
        assert normalize_phone(None) == ""


class TestEmptyCart:
    def test_empty_cart_fails_with_valid_contact(self, contact):
        result = validate_checkout(contact, [])
        assert result.ok is False
        assert result.error == "empty_cart"

    def test_ensure_valid_raises_tagged_error(self, contact):
        with pytest.raises(ValidationError) as exc:
            ensure_valid(contact, [])
        assert exc.value.code == "empty_cart"

    def test_unknown_code_is_rejected(self):
        with pytest.raises(ValueError):
            ValidationError("something_else")


class TestPrefill:
    def test_prefill_from_profile(self, contact, user):
        filled = prefill_contact(contact, user)
        assert filled.first_name == "Dilnoza"
        assert filled.last_name == "Rahimova"
        assert filled.email == "dilnoza@example.com"
        assert filled.phone == "+998 90 765 43 21"
        assert filled.address == contact.address

    def test_no_user_keeps_contact(self, contact):
        assert prefill_contact(contact, None) == contact

    def test_locked_fields_ignored_when_authenticated(self, contact):
        edited = apply_edits(contact, {"first_name": "X", "city": "Samarkand"}, authenticated=True)
        assert edited.first_name == "Aziz"
        assert edited.city == "Samarkand"
        assert set(LOCKED_FIELDS) == {"first_name", "last_name", "email", "phone"}

    def test_guest_can_edit_everything(self, contact):
        edited = apply_edits(contact, {"first_name": "X", "phone": "+998 99 000 00 00"}, authenticated=False)
        assert edited.first_name == "X"
        assert edited.phone == "+998 99 000 00 00"


class TestBuildOrderRequest:
    def test_payload_shape(self, contact, product):
        order = build_order_request(contact, [product.model_copy(update={"quantity": 2})], PaymentMethod.CARD)
        payload = order.to_payload()
        assert payload == {
            "firstName": "Aziz",
            "lastName": "Karimov",
            "email": "noemail@example.com",
            "phone": "+998901234567",
            "address": "Amir Temur 1",
            "city": "Tashkent",
            "region": "Tashkent",
            "paymentMethod": "card",
            "items": [{"productId": "p1", "quantity": 2}],
        }

    def test_email_and_notes_kept_when_given(self, contact, product):
        filled = contact.model_copy(update={"email": " a@b.uz ", "notes": "Call before delivery"})
        payload = build_order_request(filled, [product]).to_payload()
        assert payload["email"] == "a@b.uz"
        assert payload["notes"] == "Call before delivery"
        assert payload["paymentMethod"] == "cash"

    def test_phone_is_normalized(self, contact, product):
        filled = contact.model_copy(update={"phone": "+998 (90) 123-45-67"})
        assert build_order_request(filled, [product]).phone == "+998901234567"
