# storefront/services/order_client.py
from typing import List

import requests
from requests import RequestException

from storefront.domain.errors import SubmissionError
from storefront.domain.schemas import OrderConfirmation, OrderRequest, OrderStatus
from storefront.utils.retry import RetryableStatusError, http_retry
from storefront.utils.settings import BACKEND_API_URL, HTTP_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _error_message(resp: requests.Response) -> str:
    #backend zwraca {message} przy bledach, message bywa tez lista
    try:
        body = resp.json()
    except ValueError:
        body = None

    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, list):
        message = "; ".join(str(m) for m in message)
    return message or f"HTTP error! status: {resp.status_code}"


class OrderClient:
    """
    Klient REST dla /orders.
    Retry (tenacity) na bledy sieci, 429 i 5xx - tak jak klient API frontendu.
    Kazdy blad wychodzi jako SubmissionError.
    """

    def __init__(self, base_url: str | None = None, timeout: float = HTTP_TIMEOUT_SECONDS):
        self.base_url = (base_url or BACKEND_API_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def _send(self, method: str, url: str, headers: dict, payload: dict | None) -> requests.Response:
        logger.info(f"OrderClient {method} {url}")

        resp = requests.request(method, url, json=payload, headers=headers, timeout=self.timeout)
        if resp.status_code == 429 or resp.status_code >= 500:
            raise RetryableStatusError(resp)
        return resp

    def _request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        payload: dict | None = None,
        idempotency_key: str | None = None,
    ):
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key

        try:
            resp = self._send(method, url, headers, payload)
        except RetryableStatusError as e:
            resp = e.response
        except RequestException as e:
            logger.error(f"OrderClient {method} {url} network error: {e}")
            raise SubmissionError(SubmissionError.NETWORK, str(e)) from e

        if not resp.ok:
            message = _error_message(resp)
            logger.error(f"OrderClient {method} {url} failed ({resp.status_code}): {message}")
            raise SubmissionError(SubmissionError.SERVER, message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise SubmissionError(
                SubmissionError.SERVER,
                "Invalid JSON in response",
                status_code=resp.status_code,
            ) from e

    def _parse(self, data) -> OrderConfirmation:
        try:
            return OrderConfirmation.model_validate(data)
        except ValueError as e:
            raise SubmissionError(SubmissionError.SERVER, f"Unexpected order payload: {e}") from e

    #commands
    def create_order(
        self,
        order: OrderRequest,
        token: str | None = None,
        idempotency_key: str | None = None,
    ) -> OrderConfirmation:
        data = self._request(
            "POST",
            "/orders",
            token=token,
            payload=order.to_payload(),
            idempotency_key=idempotency_key,
        )
        confirmation = self._parse(data)
        logger.info(f"Order {confirmation.order_number} created, total {confirmation.total_amount}")
        return confirmation

    def update_order_status(self, order_id: str, status: OrderStatus, token: str | None = None) -> OrderConfirmation:
        data = self._request(
            "PATCH",
            f"/orders/{order_id}/status",
            token=token,
            payload={"status": OrderStatus(status).value},
        )
        return self._parse(data)

    #queries
    def get_order(self, order_id: str, token: str | None = None) -> OrderConfirmation:
        return self._parse(self._request("GET", f"/orders/{order_id}", token=token))

    def get_my_orders(self, token: str) -> List[OrderConfirmation]:
        data = self._request("GET", "/orders/my-orders", token=token)
        return [self._parse(row) for row in data]

    def get_all_orders(self, token: str) -> List[OrderConfirmation]:
        data = self._request("GET", "/orders", token=token)
        return [self._parse(row) for row in data]
