# storefront/services/checkout_service.py
import hashlib
import json
import threading
import uuid
from typing import List

from storefront.domain import messages
from storefront.domain.errors import CheckoutBusyError, SubmissionError, ValidationError
from storefront.domain.schemas import (
    CheckoutContactInfo,
    CheckoutState,
    CurrentUser,
    OrderConfirmation,
    OrderRequest,
    PaymentMethod,
    SubmitOut,
)
from storefront.services.cart_store import CartStore
from storefront.services.checkout_validation import (
    LOCKED_FIELDS,
    apply_edits,
    build_order_request,
    ensure_valid,
    prefill_contact,
)
from storefront.services.notification_service import NotificationService
from storefront.services.order_client import OrderClient
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _fingerprint(order: OrderRequest) -> str:
    payload = json.dumps(order.to_payload(), sort_keys=True)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class CheckoutSession:
    """
    Checkout jednej sesji: formularz + maszyna stanow
    editing -> validating -> submitting -> succeeded | failed

    - walidacja przed jakimkolwiek requestem
    - busy flag (lock bez czekania) blokuje drugi submit w trakcie pierwszego
    - po bledzie koszyk i formularz zostaja bez zmian
    - po sukcesie: powiadomienie (best-effort) -> czyszczenie koszyka -> redirect
    """

    def __init__(
        self,
        cart: CartStore,
        order_client: OrderClient,
        notification_service: NotificationService | None = None,
    ):
        self.cart = cart
        self.order_client = order_client
        self.notification_service = notification_service or NotificationService()

        self.contact = CheckoutContactInfo()
        self.state = CheckoutState.EDITING
        self._busy = threading.Lock()

        #idempotency key zyje tak dlugo jak ten sam payload
        self._pending_key: str | None = None
        self._pending_fingerprint: str | None = None

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    def locked_fields(self, user: CurrentUser | None) -> List[str]:
        return list(LOCKED_FIELDS) if user else []

    def form(self, user: CurrentUser | None) -> CheckoutContactInfo:
        """Formularz do wyswietlenia, dla zalogowanego uzupelniony z profilu."""
        return prefill_contact(self.contact, user)

    def edit(self, edits: dict, user: CurrentUser | None = None) -> CheckoutContactInfo:
        self.contact = apply_edits(self.contact, edits, authenticated=user is not None)
        if self.state in (CheckoutState.FAILED, CheckoutState.SUCCEEDED):
            self.state = CheckoutState.EDITING
        return self.form(user)

    def submit(
        self,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        user: CurrentUser | None = None,
        token: str | None = None,
        language: str | None = None,
    ) -> SubmitOut:
        """
        Jedna proba zlozenia zamowienia, zawsze dokladnie jeden komunikat dla uzytkownika.
        ValidationError i SubmissionError -> status failed, wyjatek tylko gdy submit juz trwa.
        """
        if not self._busy.acquire(blocking=False):
            raise CheckoutBusyError(messages.translate(messages.CHECKOUT_BUSY, language))

        try:
            self.state = CheckoutState.VALIDATING
            contact = self.form(user)
            items = self.cart.items

            try:
                ensure_valid(contact, items)
            except ValidationError as e:
                logger.info(f"Checkout validation failed: {e.code}")
                self.state = CheckoutState.FAILED
                return SubmitOut(
                    status=CheckoutState.FAILED,
                    error=e.code,
                    message=messages.translate(e.code, language),
                )

            order = build_order_request(contact, items, payment_method)
            key = self._idempotency_key(order)

            self.state = CheckoutState.SUBMITTING
            try:
                confirmation = self.order_client.create_order(order, token=token, idempotency_key=key)
            except SubmissionError as e:
                #szczegoly z backendu tylko do logow, uzytkownik dostaje ogolny komunikat
                logger.error(f"Order submission failed: {e}")
                self.state = CheckoutState.FAILED
                return SubmitOut(
                    status=CheckoutState.FAILED,
                    error=f"submission_{e.kind}",
                    message=messages.translate(messages.SUBMISSION_FAILED, language),
                )

            self._pending_key = None
            self._pending_fingerprint = None

            self.notification_service.dispatch_order_summary(
                confirmation, order, items, self.cart.totals()
            )

            self.state = CheckoutState.SUCCEEDED
            return self._reconcile(confirmation, user, language)
        finally:
            self._busy.release()

    def _idempotency_key(self, order: OrderRequest) -> str:
        fingerprint = _fingerprint(order)
        if self._pending_key is None or fingerprint != self._pending_fingerprint:
            self._pending_key = str(uuid.uuid4())
            self._pending_fingerprint = fingerprint
        return self._pending_key

    def _reconcile(
        self,
        confirmation: OrderConfirmation,
        user: CurrentUser | None,
        language: str | None,
    ) -> SubmitOut:
        #zamowienie jest juz faktem w backendzie, tu tylko sprzatanie stanu lokalnego
        message = messages.translate(messages.ORDER_CREATED, language)
        self.cart.clear()
        self.contact = CheckoutContactInfo()

        redirect_to = settings.ORDER_HISTORY_PATH if user else settings.CONFIRMATION_PATH
        logger.info(f"Order {confirmation.order_number} placed, redirecting to {redirect_to}")

        return SubmitOut(
            status=CheckoutState.SUCCEEDED,
            message=message,
            order=confirmation,
            redirect_to=redirect_to,
            redirect_after=settings.REDIRECT_DELAY_SECONDS,
        )
