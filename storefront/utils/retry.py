# storefront/utils/retry.py
import requests
import redis
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class RetryableStatusError(Exception):
    """
    Odpowiedz 429 albo 5xx z backendu - warto sprobowac jeszcze raz.
    Trzyma response zeby po wyczerpaniu prob dalo sie odczytac body.
    """

    def __init__(self, response: requests.Response):
        super().__init__(f"HTTP error! status: {response.status_code}")
        self.response = response

    @property
    def retry_after(self) -> float | None:
        value = self.response.headers.get("Retry-After")
        if value is None:
            return None
        try:
            return float(value)
        except ValueError:
            return None


def _linear_wait(retry_state) -> float:
    #429 z Retry-After -> tyle ile kaze serwer, reszta liniowo delay * nr proby
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    if isinstance(exc, RetryableStatusError) and exc.retry_after is not None:
        return exc.retry_after
    return settings.HTTP_RETRY_DELAY_SECONDS * retry_state.attempt_number


def _log_retry(retry_state):
    exc = retry_state.outcome.exception()
    logger.warning(
        f"Retrying {retry_state.fn.__name__} after attempt "
        f"{retry_state.attempt_number}: {exc}"
    )


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(settings.HTTP_MAX_RETRIES + 1),
        wait=_linear_wait,
        retry=retry_if_exception_type(
            (requests.ConnectionError, requests.Timeout, RetryableStatusError)
        ),
        before_sleep=_log_retry,
    )


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )
