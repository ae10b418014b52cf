import hashlib
import hmac
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from core import config
from core.shops import Shops
from routes import shopify_auth

TEST_SHOP = "demo-store.myshopify.com"
TEST_CLIENT_ID = "test-client-id"
TEST_CLIENT_SECRET = "test-client-secret"
TEST_BEARER = "test-bearer-secret"
TEST_BASE_URL = "https://gateway.example.com"


@pytest.fixture(autouse=True)
def gateway_config(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "IS_DEV", False)
    monkeypatch.setattr(config, "SHOPIFY_API_KEY", TEST_CLIENT_ID)
    monkeypatch.setattr(config, "SHOPIFY_API_SECRET", TEST_CLIENT_SECRET)
    monkeypatch.setattr(config, "SHOPIFY_SCOPES", "read_orders,read_customers")
    monkeypatch.setattr(config, "SHOPIFY_API_VERSION", "2025-01")
    monkeypatch.setattr(config, "APP_BASE_URL", TEST_BASE_URL)
    monkeypatch.setattr(config, "API_BEARER_TOKEN", TEST_BEARER)
    monkeypatch.setattr(config, "SHOPS_FILE", str(tmp_path / "shops.json"))
    monkeypatch.setattr(config, "ENCRYPTION_SECRET", None)
    monkeypatch.setattr(config, "ORDERS_LOCALE", "en")
    monkeypatch.setattr(config, "ORDERS_DEFAULT_LIMIT", 10)
    shopify_auth.nonces.clear()
    yield config
    shopify_auth.nonces.clear()


@pytest.fixture
def token_store():
    # Same file the route modules read, via config.SHOPS_FILE
    return Shops()


@pytest.fixture
def client():
    from main import app
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TEST_BEARER}"}


@pytest.fixture
def installed_shop(token_store):
    token_store.save_token(TEST_SHOP, "shpat_installed")
    return TEST_SHOP


def sign_oauth_params(params: dict, secret: str = TEST_CLIENT_SECRET) -> str:
    message = "&".join(f"{key}={value}" for key, value in sorted(params.items()) if key != "hmac")
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def start_install(client, shop: str = TEST_SHOP) -> str:
    """Hit /auth and return the state issued in the redirect."""
    response = client.get("/auth", params={"shop": shop}, follow_redirects=False)
    assert response.status_code == 302
    return parse_qs(urlparse(response.headers["location"]).query)["state"][0]
