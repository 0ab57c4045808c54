# storefront/services/session_registry.py
import threading
import time
from typing import Callable, Dict, List

import redis

from storefront.domain.schemas import CartLineItem
from storefront.repos.cart_repo import CartRepo
from storefront.services.cart_store import CartStore
from storefront.services.checkout_service import CheckoutSession
from storefront.services.notification_service import NotificationService
from storefront.services.order_client import OrderClient
from storefront.utils.settings import SESSION_IDLE_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SessionRegistry:
    """
    Jeden CartStore + CheckoutSession na sesje.
    open -> (restore z redisa) ... close przy wylogowaniu (teardown + usuniecie snapshotu).

    Sesje nieuzywane dluzej niz idle_ttl sa zdejmowane z pamieci przy kolejnym get().
    Snapshot w redisie zostaje, wiec powrot po przerwie odtwarza koszyk.
    """

    def __init__(
        self,
        order_client: OrderClient,
        notification_service: NotificationService | None = None,
        cart_repo: CartRepo | None = None,
        idle_ttl: float = SESSION_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.order_client = order_client
        self.notification_service = notification_service or NotificationService()
        self.cart_repo = cart_repo
        self.idle_ttl = idle_ttl
        self.clock = clock
        self._sessions: Dict[str, CheckoutSession] = {}
        self._last_seen: Dict[str, float] = {}
        self._next_sweep = clock() + idle_ttl
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._sessions)

    def get(self, session_id: str) -> CheckoutSession:
        with self._lock:
            now = self.clock()
            if now >= self._next_sweep:
                self._evict_idle(now)

            session = self._sessions.get(session_id)
            if session is None:
                session = self._open(session_id)
                self._sessions[session_id] = session
            self._last_seen[session_id] = now
            return session

    def cart(self, session_id: str) -> CartStore:
        return self.get(session_id).cart

    def close(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
            self._last_seen.pop(session_id, None)

        if self.cart_repo:
            try:
                self.cart_repo.delete(session_id)
            except redis.RedisError as e:
                logger.warning(f"Failed to delete cart snapshot for session {session_id}: {e}")

        logger.info(f"Session {session_id} closed")
        return session is not None

    def _evict_idle(self, now: float) -> None:
        #wolane pod self._lock
        deadline = now - self.idle_ttl
        idle = [
            sid for sid, seen in self._last_seen.items()
            if seen <= deadline and not self._sessions[sid].busy
        ]
        for sid in idle:
            del self._sessions[sid]
            del self._last_seen[sid]

        if idle:
            logger.info(f"Evicted {len(idle)} idle sessions, {len(self._sessions)} left")
        self._next_sweep = now + min(self.idle_ttl, 60)

    def _open(self, session_id: str) -> CheckoutSession:
        items: List[CartLineItem] = []
        if self.cart_repo:
            try:
                items = self.cart_repo.load(session_id)
            except redis.RedisError as e:
                logger.warning(f"Failed to restore cart for session {session_id}: {e}")

        cart = CartStore(items)
        if self.cart_repo:
            cart.subscribe(self._persister(session_id))

        logger.info(f"Session {session_id} opened with {len(items)} cart lines")
        return CheckoutSession(cart, self.order_client, self.notification_service)

    def _persister(self, session_id: str):
        def persist(snapshot: List[CartLineItem]) -> None:
            try:
                self.cart_repo.save(session_id, snapshot)
            except redis.RedisError as e:
                logger.warning(f"Failed to persist cart for session {session_id}: {e}")

        return persist
