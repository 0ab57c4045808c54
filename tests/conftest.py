import json
from unittest.mock import MagicMock

import pytest
import requests

from storefront.domain.schemas import CartLineItem, CheckoutContactInfo, CurrentUser
from storefront.utils import settings


def make_response(status_code: int, body=None, headers: dict | None = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(body).encode("utf-8") if body is not None else b""
    resp.headers.update(headers or {})
    return resp


def order_record(**overrides) -> dict:
    record = {
        "id": "ord-1",
        "orderNumber": "ORD-20261019-0001",
        "userId": None,
        "firstName": "Aziz",
        "lastName": "Karimov",
        "email": "noemail@example.com",
        "phone": "+998901234567",
        "address": "Amir Temur 1",
        "city": "Tashkent",
        "region": "Tashkent",
        "totalAmount": "90000.00",
        "status": "pending",
        "paymentMethod": "cash",
        "isPaid": False,
        "notes": None,
        "createdAt": "2026-10-19T10:00:00.000Z",
        "updatedAt": "2026-10-19T10:00:00.000Z",
        "items": [
            {
                "id": "item-1",
                "orderId": "ord-1",
                "productId": "p1",
                "quantity": 2,
                "price": "45000.00",
                "subtotal": "90000.00",
            }
        ],
    }
    record.update(overrides)
    return record


@pytest.fixture(autouse=True)
def no_retry_delay(monkeypatch):
    monkeypatch.setattr(settings, "HTTP_RETRY_DELAY_SECONDS", 0)


@pytest.fixture(autouse=True)
def no_celery_broker(monkeypatch):
    #zaden test nie moze publikowac do prawdziwego brokera
    from storefront.services import notification_service

    task = MagicMock()
    monkeypatch.setattr(notification_service, "send_order_notification_task", task)
    return task


@pytest.fixture
def product():
    return CartLineItem(product_id="p1", name="Kabel VVG 3x2.5", price="45,000", quantity=1)


@pytest.fixture
def other_product():
    return CartLineItem(product_id="p2", name="Rozetka Legrand", price="12,500", quantity=1)


@pytest.fixture
def contact():
    return CheckoutContactInfo(
        first_name="Aziz",
        last_name="Karimov",
        phone="+998901234567",
        address="Amir Temur 1",
        city="Tashkent",
        region="Tashkent",
    )


@pytest.fixture
def user():
    return CurrentUser(
        id="u-1",
        first_name="Dilnoza",
        last_name="Rahimova",
        email="dilnoza@example.com",
        phone="+998 90 765 43 21",
    )
