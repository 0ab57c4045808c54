"""Tests for the best-effort operator notification."""

from unittest.mock import patch

import pytest
import requests

from storefront.domain.errors import NotificationError
from storefront.domain.schemas import OrderConfirmation
from storefront.services import notification_service
from storefront.services.cart_store import compute_totals
from storefront.services.checkout_validation import build_order_request
from storefront.services.notification_service import (
    NotificationService,
    format_order_summary,
    post_to_telegram,
    send_order_notification_task,
)
from storefront.utils import settings

from tests.conftest import make_response, order_record

POST = "storefront.services.notification_service.requests.post"


@pytest.fixture
def telegram(monkeypatch):
    monkeypatch.setattr(settings, "TELEGRAM_API_URL", "https://telegram.test")
    monkeypatch.setattr(settings, "TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setattr(settings, "TELEGRAM_CHAT_ID", "266226148")


@pytest.fixture
def summary_args(contact, product):
    items = [product.model_copy(update={"quantity": 2})]
    confirmation = OrderConfirmation.model_validate(order_record())
    order = build_order_request(contact.model_copy(update={"notes": "Ring twice"}), items)
    return confirmation, order, items, compute_totals(items)


class TestFormatOrderSummary:
    def test_contains_order_details(self, summary_args):
        text = format_order_summary(*summary_args)
        assert "ORD-20261019-0001" in text
        assert "Aziz Karimov" in text
        assert "+998901234567" in text
        assert "Tashkent, Tashkent, Amir Temur 1" in text
        assert "1. Kabel VVG 3x2.5 - 2 dona - 45,000 UZS" in text
        assert "90,000 UZS" in text
        assert "Ring twice" in text

    def test_notes_omitted_when_empty(self, summary_args):
        confirmation, order, items, totals = summary_args
        text = format_order_summary(confirmation, order.model_copy(update={"notes": None}), items, totals)
        assert "Izoh" not in text


class TestPostToTelegram:
    def test_posts_markdown_message(self, telegram):
        with patch(POST, return_value=make_response(200, {"ok": True})) as post:
            post_to_telegram("hello")

        assert post.call_args.args == ("https://telegram.test/bot123:abc/sendMessage",)
        assert post.call_args.kwargs["json"] == {
            "chat_id": "266226148",
            "text": "hello",
            "parse_mode": "Markdown",
        }

    def test_non_2xx_raises_notification_error(self, telegram):
        with patch(POST, return_value=make_response(400, {"ok": False})):
            with pytest.raises(NotificationError):
                post_to_telegram("hello")

    def test_network_error_raises_notification_error(self, telegram):
        with patch(POST, side_effect=requests.ConnectionError("down")):
            with pytest.raises(NotificationError):
                post_to_telegram("hello")

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.setattr(settings, "TELEGRAM_BOT_TOKEN", "")
        with patch(POST) as post:
            with pytest.raises(NotificationError):
                post_to_telegram("hello")
        post.assert_not_called()


class TestSendTask:
    def test_task_reports_sent(self):
        with patch.object(notification_service, "post_to_telegram") as post:
            result = send_order_notification_task("ORD-1", "text")
        post.assert_called_once_with("text")
        assert result == {"order_number": "ORD-1", "status": "sent"}

    def test_task_swallows_failure(self):
        with patch.object(notification_service, "post_to_telegram", side_effect=NotificationError("boom")):
            result = send_order_notification_task("ORD-1", "text")
        assert result == {"order_number": "ORD-1", "status": "failed"}


class TestDispatch:
    def test_queues_task_with_summary(self, summary_args, no_celery_broker):
        result = NotificationService.dispatch_order_summary(*summary_args)

        assert result is None
        no_celery_broker.delay.assert_called_once()
        order_number, text = no_celery_broker.delay.call_args.args
        assert order_number == "ORD-20261019-0001"
        assert "Kabel VVG 3x2.5" in text

    def test_enqueue_failure_is_swallowed(self, summary_args, no_celery_broker):
        no_celery_broker.delay.side_effect = ConnectionError("broker unavailable")
        assert NotificationService.dispatch_order_summary(*summary_args) is None
