# storefront/services/profile_client.py
import requests
from requests import RequestException

from storefront.domain.schemas import CurrentUser
from storefront.utils.retry import http_retry
from storefront.utils.settings import BACKEND_API_URL, HTTP_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProfileClient:
    """Odczyt zalogowanego uzytkownika, logowanie/rejestracja to inny serwis."""

    def __init__(self, base_url: str | None = None, timeout: float = HTTP_TIMEOUT_SECONDS):
        self.base_url = (base_url or BACKEND_API_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def _get_profile(self, token: str) -> requests.Response:
        url = f"{self.base_url}/auth/profile"
        logger.info(f"ProfileClient GET {url}")
        return requests.get(
            url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=self.timeout,
        )

    def fetch_profile(self, token: str | None) -> CurrentUser | None:
        """Brak tokena albo odrzucony token -> anonim (None)."""
        if not token:
            return None

        try:
            resp = self._get_profile(token)
            resp.raise_for_status()
            return CurrentUser.model_validate(resp.json())
        except (RequestException, ValueError) as e:
            logger.warning(f"Could not resolve current user, continuing as guest: {e}")
            return None
