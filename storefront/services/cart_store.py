# storefront/services/cart_store.py
import threading
from decimal import Decimal
from typing import Callable, Dict, Iterable, List

from storefront.domain.schemas import CartLineItem, ItemIn
from storefront.utils.money import ZERO, parse_price
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Observer = Callable[[List[CartLineItem]], None]


class CartTotals:
    """Wynik totals() - subtotale per produkt + suma calego koszyka."""

    def __init__(self, subtotals: Dict[str, Decimal], total: Decimal, item_count: int, unit_count: int):
        self.subtotals = subtotals
        self.total = total
        self.item_count = item_count
        self.unit_count = unit_count

    def __repr__(self):
        return f"CartTotals(total={self.total}, item_count={self.item_count}, unit_count={self.unit_count})"


class CartStore:
    """
    Koszyk jednej sesji trzymany w pamieci.
    Kazda mutacja od razu widoczna dla obserwatorow (subscribe).
    Obserwatorzy wolani poza lockiem koszyka - wolny obserwator (np. redis) nie blokuje odczytow.
    """

    def __init__(self, items: Iterable[CartLineItem] = ()):
        self._items: List[CartLineItem] = [i.model_copy() for i in items]
        self._observers: List[Observer] = []
        self._lock = threading.RLock()

        #kolejne wersje koszyka, obserwator nigdy nie dostaje starszej po nowszej
        self._version = 0
        self._published = 0
        self._publish_lock = threading.Lock()

    #query
    @property
    def items(self) -> List[CartLineItem]:
        with self._lock:
            return [i.model_copy() for i in self._items]

    def __len__(self):
        with self._lock:
            return len(self._items)

    def is_empty(self) -> bool:
        return len(self) == 0

    def get_item(self, product_id: str) -> CartLineItem | None:
        with self._lock:
            item = self._find(product_id)
            return item.model_copy() if item else None

    def totals(self) -> CartTotals:
        return compute_totals(self.items)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        with self._lock:
            self._observers.append(observer)

        def unsubscribe():
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    #commands
    def add_item(self, product: CartLineItem | ItemIn, quantity: int = 1) -> None:
        if quantity < 1:
            quantity = 1

        with self._lock:
            existing = self._find(product.product_id)
            if existing:
                existing.quantity += quantity
                logger.info(
                    f"Product {product.product_id} already in cart, quantity -> {existing.quantity}"
                )
            else:
                self._items.append(
                    CartLineItem(
                        product_id=product.product_id,
                        name=product.name,
                        price=product.price,
                        quantity=quantity,
                        image=product.image,
                        category=product.category,
                        brand=product.brand,
                    )
                )
                logger.info(f"Product {product.product_id} added to cart (qty {quantity})")
            change = self._changed()

        self._publish(*change)

    def update_quantity(self, product_id: str, quantity: int) -> bool:
        #ilosc < 1 odrzucona, do usuwania jest remove_item
        if quantity < 1:
            logger.info(f"Rejected quantity {quantity} for product {product_id}")
            return False

        with self._lock:
            item = self._find(product_id)
            if not item:
                return False
            item.quantity = quantity
            change = self._changed()

        self._publish(*change)
        return True

    def remove_item(self, product_id: str) -> bool:
        with self._lock:
            item = self._find(product_id)
            if not item:
                return False
            self._items.remove(item)
            logger.info(f"Product {product_id} removed from cart")
            change = self._changed()

        self._publish(*change)
        return True

    def clear(self) -> None:
        with self._lock:
            self._items = []
            logger.info("Cart cleared")
            change = self._changed()

        self._publish(*change)

    def _find(self, product_id: str) -> CartLineItem | None:
        for item in self._items:
            if item.product_id == product_id:
                return item
        return None

    def _changed(self):
        #wolane pod self._lock
        self._version += 1
        snapshot = [i.model_copy() for i in self._items]
        return self._version, snapshot, list(self._observers)

    def _publish(self, version: int, snapshot: List[CartLineItem], observers: List[Observer]) -> None:
        with self._publish_lock:
            if version <= self._published:
                return
            self._published = version
            for observer in observers:
                observer(snapshot)


def compute_totals(items: Iterable[CartLineItem]) -> CartTotals:
    subtotals: Dict[str, Decimal] = {}
    total = ZERO
    unit_count = 0

    for item in items:
        subtotal = parse_price(item.price) * item.quantity
        subtotals[item.product_id] = subtotal
        total += subtotal
        unit_count += item.quantity

    return CartTotals(
        subtotals=subtotals,
        total=total,
        item_count=len(subtotals),
        unit_count=unit_count,
    )
