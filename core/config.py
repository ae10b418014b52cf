# core/config.py

from dotenv import load_dotenv
import os

load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "production").lower()
IS_DEV = ENVIRONMENT == "development"

SHOPIFY_API_KEY = os.getenv("SHOPIFY_API_KEY")
SHOPIFY_API_SECRET = os.getenv("SHOPIFY_API_SECRET")
SHOPIFY_API_VERSION = os.getenv("SHOPIFY_API_VERSION", "2025-01").strip()
SHOPIFY_SCOPES = os.getenv("SHOPIFY_SCOPES")
SHOPIFY_HTTP_TIMEOUT = float(os.getenv("SHOPIFY_HTTP_TIMEOUT", "15"))

APP_BASE_URL = os.getenv("APP_BASE_URL")
PORT = int(os.getenv("PORT", "3000"))

API_BEARER_TOKEN = os.getenv("API_BEARER_TOKEN")

SHOPS_FILE = os.getenv("SHOPS_FILE", "shops.json")
ENCRYPTION_SECRET = os.getenv("ENCRYPTION_SECRET", None)

OAUTH_NONCE_TTL_SECONDS = int(os.getenv("OAUTH_NONCE_TTL_SECONDS", "600"))

ORDERS_LOCALE = os.getenv("ORDERS_LOCALE", "en").lower()
ORDERS_DEFAULT_LIMIT = int(os.getenv("ORDERS_DEFAULT_LIMIT", "10"))
ORDERS_MAX_LIMIT = 250


def missing_oauth_config() -> list[str]:
    """
    Names of the OAuth settings that are not set. Read at call time so a
    running process picks up values patched in after import.
    """
    required = {
        "SHOPIFY_API_KEY": SHOPIFY_API_KEY,
        "SHOPIFY_API_SECRET": SHOPIFY_API_SECRET,
        "SHOPIFY_SCOPES": SHOPIFY_SCOPES,
        "APP_BASE_URL": APP_BASE_URL,
    }
    return [name for name, value in required.items() if not value]


def missing_required_config() -> list[str]:
    missing = missing_oauth_config()
    if not API_BEARER_TOKEN:
        missing.append("API_BEARER_TOKEN")
    return missing


def get_app_base_url() -> str:
    return (APP_BASE_URL or "").rstrip("/")
