# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.dependencies import get_order_client, get_token
from storefront.domain.errors import SubmissionError
from storefront.domain.schemas import OrderConfirmation, StatusUpdateIn
from storefront.services.order_client import OrderClient

router = APIRouter(prefix="/orders", tags=["orders"])


def _raise_http(e: SubmissionError):
    if e.kind == SubmissionError.SERVER and e.status_code and e.status_code < 500:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    raise HTTPException(status_code=502, detail=e.message)


def _require_token(token: str | None) -> str:
    if not token:
        raise HTTPException(status_code=401, detail="Authorization required")
    return token


@router.get("/my-orders", response_model=List[OrderConfirmation])
def my_orders(
    token: str | None = Depends(get_token),
    client: OrderClient = Depends(get_order_client),
):
    """Historia zamowien zalogowanego uzytkownika."""
    try:
        return client.get_my_orders(_require_token(token))
    except SubmissionError as e:
        _raise_http(e)


@router.get("", response_model=List[OrderConfirmation])
def all_orders(
    token: str | None = Depends(get_token),
    client: OrderClient = Depends(get_order_client),
):
    try:
        return client.get_all_orders(_require_token(token))
    except SubmissionError as e:
        _raise_http(e)


@router.patch("/{order_id}/status", response_model=OrderConfirmation)
def update_status(
    order_id: str,
    payload: StatusUpdateIn,
    token: str | None = Depends(get_token),
    client: OrderClient = Depends(get_order_client),
):
    try:
        return client.update_order_status(order_id, payload.status, token=_require_token(token))
    except SubmissionError as e:
        _raise_http(e)


@router.get("/{order_id}", response_model=OrderConfirmation)
def get_order(
    order_id: str,
    token: str | None = Depends(get_token),
    client: OrderClient = Depends(get_order_client),
):
    """Szczegoly zamowienia (strona potwierdzenia / historia)."""
    try:
        return client.get_order(order_id, token=token)
    except SubmissionError as e:
        _raise_http(e)
