# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.dependencies import get_registry
from storefront.domain.schemas import CartLineOut, CartOut, ItemIn, QuantityIn
from storefront.services.cart_store import CartStore
from storefront.services.session_registry import SessionRegistry

router = APIRouter(tags=["carts"])


def cart_out(session_id: str, cart: CartStore) -> CartOut:
    items = cart.items
    totals = cart.totals()
    return CartOut(
        session_id=session_id,
        items=[
            CartLineOut(
                **item.model_dump(),
                subtotal=totals.subtotals[item.product_id],
            )
            for item in items
        ],
        total=totals.total,
        item_count=totals.item_count,
        unit_count=totals.unit_count,
    )


@router.get("/carts/{session_id}", response_model=CartOut)
def get_cart(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    return cart_out(session_id, registry.cart(session_id))


@router.post("/carts/{session_id}/items", response_model=CartOut, status_code=201)
def add_item(
    session_id: str,
    payload: ItemIn,
    registry: SessionRegistry = Depends(get_registry),
):
    cart = registry.cart(session_id)
    cart.add_item(payload, payload.quantity)
    return cart_out(session_id, cart)


@router.patch("/carts/{session_id}/items/{product_id}", response_model=CartOut)
def update_item(
    session_id: str,
    product_id: str,
    payload: QuantityIn,
    registry: SessionRegistry = Depends(get_registry),
):
    cart = registry.cart(session_id)

    if payload.quantity < 1:
        raise HTTPException(status_code=400, detail="Quantity must be at least 1, use DELETE to remove")

    if not cart.update_quantity(product_id, payload.quantity):
        raise HTTPException(status_code=404, detail="Product not in cart")

    return cart_out(session_id, cart)


@router.delete("/carts/{session_id}/items/{product_id}", response_model=CartOut)
def remove_item(
    session_id: str,
    product_id: str,
    registry: SessionRegistry = Depends(get_registry),
):
    cart = registry.cart(session_id)
    cart.remove_item(product_id)
    return cart_out(session_id, cart)


@router.delete("/carts/{session_id}", response_model=CartOut)
def clear_cart(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    cart = registry.cart(session_id)
    cart.clear()
    return cart_out(session_id, cart)


@router.delete("/sessions/{session_id}", status_code=204)
def close_session(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    """Wylogowanie - koszyk sesji jest usuwany."""
    registry.close(session_id)
