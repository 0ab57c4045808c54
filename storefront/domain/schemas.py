# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    ONLINE = "online"


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class CheckoutState(str, Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ApiModel(BaseModel):
    """Modele HTTP API - w JSON camelCase, w Pythonie snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =====================================================
# CART
# =====================================================
class CartLineItem(ApiModel):
    """Pozycja w koszyku, cena w formie wyswietlanej ("45,000")."""

    product_id: str = Field(..., min_length=1)
    name: str = ""
    price: str = "0"
    quantity: int = Field(1, ge=1)
    image: str | None = None
    category: str | None = None
    brand: str | None = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class ItemIn(ApiModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1, description="ID produktu")
    name: str = ""
    price: str = "0"
    quantity: int = Field(1, ge=1, description="Ilosc (domyslnie 1)")
    image: str | None = None
    category: str | None = None
    brand: str | None = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class QuantityIn(ApiModel):
    quantity: int


class CartLineOut(ApiModel):
    product_id: str
    name: str
    price: str
    quantity: int
    subtotal: Decimal
    image: str | None = None
    category: str | None = None
    brand: str | None = None


class CartOut(ApiModel):
    session_id: str
    items: List[CartLineOut]
    total: Decimal
    item_count: int
    unit_count: int


# =====================================================
# CHECKOUT FORM
# =====================================================
class CheckoutContactInfo(ApiModel):
    """Dane kontaktowe z formularza, puste pola dozwolone do momentu submitu."""

    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str = ""
    address: str = ""
    city: str = ""
    region: str = ""
    notes: str | None = None


class ContactUpdateIn(ApiModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    region: str | None = None
    notes: str | None = None


class CheckoutOut(ApiModel):
    session_id: str
    state: CheckoutState
    busy: bool
    authenticated: bool
    contact: CheckoutContactInfo
    locked_fields: List[str]


class SubmitIn(ApiModel):
    payment_method: PaymentMethod = PaymentMethod.CASH
    language: str | None = None


# =====================================================
# BACKEND WIRE FORMAT (camelCase)
# =====================================================
class OrderItemIn(BaseModel):
    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(..., ge=1)

    model_config = ConfigDict(populate_by_name=True)


class OrderRequest(BaseModel):
    """Body dla POST /orders."""

    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    phone: str
    address: str
    city: str
    region: str
    payment_method: PaymentMethod = Field(PaymentMethod.CASH, alias="paymentMethod")
    notes: str | None = None
    items: List[OrderItemIn] = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class OrderItemOut(BaseModel):
    id: str | None = None
    product_id: str | None = Field(None, alias="productId")
    quantity: int
    price: Decimal | None = None
    subtotal: Decimal | None = None

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="allow",
    )


class OrderConfirmation(BaseModel):
    """
    Rekord zamowienia z backendu (POST /orders, GET /orders, GET /orders/my-orders).
    Backend jest zrodlem prawdy, klient tylko czyta.
    """

    id: str
    order_number: str = Field(..., alias="orderNumber")
    total_amount: Decimal = Field(..., alias="totalAmount")
    status: OrderStatus = OrderStatus.PENDING
    user_id: str | None = Field(None, alias="userId")
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    region: str | None = None
    payment_method: PaymentMethod | None = Field(None, alias="paymentMethod")
    is_paid: bool | None = Field(None, alias="isPaid")
    notes: str | None = None
    created_at: datetime | None = Field(None, alias="createdAt")
    items: List[OrderItemOut] = Field(default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="allow",
    )


class StatusUpdateIn(BaseModel):
    status: OrderStatus


class CurrentUser(BaseModel):
    """Zalogowany uzytkownik z GET /auth/profile (tylko odczyt)."""

    id: str
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str | None = None
    phone: str = ""
    role: str = "user"

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class SubmitOut(ApiModel):
    status: CheckoutState
    message: str
    order: OrderConfirmation | None = None
    error: str | None = None
    redirect_to: str | None = None
    redirect_after: float | None = None
