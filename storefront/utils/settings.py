# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

BACKEND_API_URL = os.getenv("BACKEND_API_URL", "http://localhost:3001/api")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", 10))
HTTP_MAX_RETRIES = int(os.getenv("HTTP_MAX_RETRIES", 3))
HTTP_RETRY_DELAY_SECONDS = float(os.getenv("HTTP_RETRY_DELAY_SECONDS", 1.0))

REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")

CART_PERSISTENCE_ENABLED = os.getenv("CART_PERSISTENCE_ENABLED", "true").lower() in ("1", "true", "yes")
CART_TTL_SECONDS = int(os.getenv("CART_TTL_SECONDS", 7 * 24 * 60 * 60))
SESSION_IDLE_SECONDS = float(os.getenv("SESSION_IDLE_SECONDS", 30 * 60))

TELEGRAM_API_URL = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
TELEGRAM_CHAT_ID = os.getenv("TELEGRAM_CHAT_ID", "")

PLACEHOLDER_EMAIL = os.getenv("PLACEHOLDER_EMAIL", "noemail@example.com")
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "ru")

REDIRECT_DELAY_SECONDS = float(os.getenv("REDIRECT_DELAY_SECONDS", 1.5))
CONFIRMATION_PATH = os.getenv("CONFIRMATION_PATH", "/order-confirmation")
ORDER_HISTORY_PATH = os.getenv("ORDER_HISTORY_PATH", "/profile")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
