# storefront/repos/cart_repo.py
import json
from typing import List

import redis

from storefront.domain.schemas import CartLineItem
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CART_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    """
    Snapshot koszyka w redisie, zeby przetrwal nawigacje i restart procesu.
    Klucz cart:{session_id}, wartosc to lista pozycji w JSON, TTL odnawiany przy zapisie.
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None, ttl: int = CART_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(session_id: str) -> str:
        return f"cart:{session_id}"

    @redis_retry()
    def load(self, session_id: str) -> List[CartLineItem]:
        raw = self.redis.get(self._key(session_id))
        if not raw:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            return [CartLineItem.model_validate(row) for row in data]
        except (ValueError, TypeError) as e:
            #uszkodzony snapshot - zaczynamy od pustego koszyka
            logger.warning(f"Dropping unreadable cart snapshot for session {session_id}: {e}")
            return []

    @redis_retry()
    def save(self, session_id: str, items: List[CartLineItem]) -> None:
        key = self._key(session_id)
        if not items:
            self.redis.delete(key)
            return

        payload = json.dumps([i.model_dump(mode="json") for i in items])
        self.redis.set(name=key, value=payload, ex=self.ttl)

    @redis_retry()
    def delete(self, session_id: str) -> None:
        self.redis.delete(self._key(session_id))
