# storefront/services/notification_service.py
from typing import List

import requests
from requests import RequestException

from storefront.celery_worker import celery_app
from storefront.domain.errors import NotificationError
from storefront.domain.schemas import CartLineItem, OrderConfirmation, OrderRequest
from storefront.services.cart_store import CartTotals
from storefront.utils.money import format_price
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def format_order_summary(
    confirmation: OrderConfirmation,
    order: OrderRequest,
    items: List[CartLineItem],
    totals: CartTotals,
) -> str:
    """Tekst (Markdown) dla operatora: numer, klient, kontakt, adres, pozycje, suma."""
    product_list = "\n".join(
        f"{index}. {item.name or item.product_id} - {item.quantity} dona - {item.price} UZS"
        for index, item in enumerate(items, start=1)
    )

    lines = [
        "🛒 *Yangi Buyurtma!*",
        "",
        f"🧾 *Buyurtma raqami:* {confirmation.order_number}",
        f"👤 *Mijoz:* {order.first_name} {order.last_name}",
        f"📱 *Telefon:* {order.phone}",
        f"✉️ *Email:* {order.email}",
        f"📍 *Manzil:* {order.region}, {order.city}, {order.address}",
        f"💳 *To'lov:* {order.payment_method.value}",
        "",
        f"📦 *Mahsulotlar:*\n{product_list}",
        "",
        f"💰 *Jami summa:* {format_price(totals.total)} UZS",
        f"📊 *Mahsulotlar soni:* {totals.item_count} ta",
    ]
    if order.notes:
        lines += ["", f"📝 *Izoh:* {order.notes}"]

    return "\n".join(lines)


def post_to_telegram(text: str) -> None:
    """Jeden POST do Bot API, bez retry. Kazdy problem -> NotificationError."""
    if not settings.TELEGRAM_BOT_TOKEN or not settings.TELEGRAM_CHAT_ID:
        raise NotificationError("Telegram credentials are not configured")

    url = f"{settings.TELEGRAM_API_URL.rstrip('/')}/bot{settings.TELEGRAM_BOT_TOKEN}/sendMessage"
    try:
        resp = requests.post(
            url,
            json={
                "chat_id": settings.TELEGRAM_CHAT_ID,
                "text": text,
                "parse_mode": "Markdown",
            },
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
    except RequestException as e:
        raise NotificationError(f"Telegram request failed: {e}") from e

    if not resp.ok:
        raise NotificationError(f"Telegram responded with status {resp.status_code}")


class NotificationService:
    """
    Powiadomienie operatora o nowym zamowieniu.
    Best-effort: metoda nic nie zwraca i nigdy nie rzuca, zamowienie juz istnieje w backendzie.
    """

    @staticmethod
    def dispatch_order_summary(
        confirmation: OrderConfirmation,
        order: OrderRequest,
        items: List[CartLineItem],
        totals: CartTotals,
    ) -> None:
        try:
            text = format_order_summary(confirmation, order, items, totals)
            send_order_notification_task.delay(confirmation.order_number, text)
            logger.info(f"[NOTIFICATION] Queued summary for order {confirmation.order_number}")
        except Exception as e:
            logger.warning(
                f"[NOTIFICATION] Could not queue summary for order {confirmation.order_number}: {e}"
            )


@celery_app.task(
    name="storefront.services.notification_service.send_order_notification_task",
    ignore_result=True,
)
def send_order_notification_task(order_number: str, text: str) -> dict:
    """Celery task - wysyla podsumowanie do Telegrama, bledy tylko loguje."""
    try:
        post_to_telegram(text)
    except NotificationError as e:
        logger.warning(f"[NOTIFICATION] Order {order_number}: {e}")
        return {"order_number": order_number, "status": "failed"}

    logger.info(f"[NOTIFICATION] Order {order_number}: summary sent")
    return {"order_number": order_number, "status": "sent"}
