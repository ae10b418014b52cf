"""Tests for GET /auth and GET /auth/callback."""

from urllib.parse import parse_qs, urlparse

import pytest
import responses

from core import config
from routes import shopify_auth
from tests.conftest import TEST_BASE_URL, TEST_CLIENT_ID, TEST_SHOP, sign_oauth_params, start_install

TOKEN_URL = f"https://{TEST_SHOP}/admin/oauth/access_token"


def callback_params(state, shop=TEST_SHOP, code="auth-code", signed=True, **extra):
    params = {"shop": shop, "code": code, "state": state, "timestamp": "1710000000", **extra}
    if signed:
        params["hmac"] = sign_oauth_params(params)
    return params


class TestInstall:

    def test_redirects_to_shopify_authorize(self, client):
        response = client.get("/auth", params={"shop": "https://Demo-Store.myshopify.com/"}, follow_redirects=False)

        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert location.netloc == TEST_SHOP
        assert location.path == "/admin/oauth/authorize"

        query = parse_qs(location.query)
        assert query["client_id"] == [TEST_CLIENT_ID]
        assert query["redirect_uri"] == [f"{TEST_BASE_URL}/auth/callback"]
        assert shopify_auth.nonces.get(query["state"][0])["shop"] == TEST_SHOP

    def test_missing_shop(self, client):
        response = client.get("/auth")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_invalid_shop(self, client):
        response = client.get("/auth", params={"shop": "evil.example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid shop domain"

    @pytest.mark.parametrize("setting", ["SHOPIFY_API_KEY", "SHOPIFY_API_SECRET", "SHOPIFY_SCOPES", "APP_BASE_URL"])
    def test_incomplete_config_fails_closed(self, client, monkeypatch, setting):
        monkeypatch.setattr(config, setting, None)

        response = client.get("/auth", params={"shop": TEST_SHOP}, follow_redirects=False)

        assert response.status_code == 500
        assert response.json()["error"] == "Server configuration error"
        assert len(shopify_auth.nonces) == 0


class TestCallback:

    @responses.activate
    def test_successful_install_saves_token(self, client, token_store):
        state = start_install(client)
        responses.add(responses.POST, TOKEN_URL, json={"access_token": "shpat_new", "scope": "read_orders"})

        response = client.get("/auth/callback", params=callback_params(state))

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Shop authenticated successfully", "shop": TEST_SHOP}
        assert token_store.get_token(TEST_SHOP) == "shpat_new"

    @responses.activate
    def test_unsigned_callback_is_accepted(self, client, token_store):
        state = start_install(client)
        responses.add(responses.POST, TOKEN_URL, json={"access_token": "shpat_new"})

        response = client.get("/auth/callback", params=callback_params(state, signed=False))

        assert response.status_code == 200
        assert token_store.is_authenticated(TEST_SHOP)

    @responses.activate
    def test_state_cannot_be_reused(self, client):
        state = start_install(client)
        responses.add(responses.POST, TOKEN_URL, json={"access_token": "shpat_new"})

        first = client.get("/auth/callback", params=callback_params(state))
        second = client.get("/auth/callback", params=callback_params(state))

        assert first.status_code == 200
        assert second.status_code == 403
        assert second.json()["error"] == "Invalid state parameter"
        assert len(responses.calls) == 1

    @responses.activate
    def test_bad_hmac_is_rejected_without_exchange(self, client, token_store):
        state = start_install(client)
        params = callback_params(state)
        params["hmac"] = "0" * 64

        response = client.get("/auth/callback", params=params)

        assert response.status_code == 403
        assert response.json()["error"] == "Invalid HMAC signature"
        assert len(responses.calls) == 0
        assert token_store.get_token(TEST_SHOP) is None
        # The nonce is consumed even though validation failed
        assert shopify_auth.nonces.get(state) is None

    def test_unknown_state(self, client):
        response = client.get("/auth/callback", params=callback_params("never-issued"))

        assert response.status_code == 403
        body = response.json()
        assert body["message"] == "State not found or expired. Please restart the OAuth flow."
        assert body["auth_url"] == f"{TEST_BASE_URL}/auth?shop={TEST_SHOP}"

    def test_expired_state(self, client, monkeypatch):
        state = start_install(client)
        clock = shopify_auth.nonces.clock
        monkeypatch.setattr(shopify_auth.nonces, "clock", lambda: clock() + config.OAUTH_NONCE_TTL_SECONDS + 1)

        response = client.get("/auth/callback", params=callback_params(state))

        assert response.status_code == 403
        assert response.json()["error"] == "Invalid state parameter"

    def test_shop_mismatch_consumes_state(self, client):
        state = start_install(client, shop="other-store.myshopify.com")

        response = client.get("/auth/callback", params=callback_params(state))

        assert response.status_code == 403
        assert response.json()["error"] == "Shop mismatch"
        assert shopify_auth.nonces.get(state) is None

    @pytest.mark.parametrize("missing", ["shop", "code", "state"])
    def test_missing_params(self, client, missing):
        params = callback_params("some-state", signed=False)
        del params[missing]

        response = client.get("/auth/callback", params=params)

        assert response.status_code == 400
        assert response.json()["required"] == ["shop", "code", "state"]
        assert response.json()["example"].startswith("/auth?shop=")

    def test_invalid_shop(self, client):
        response = client.get("/auth/callback", params=callback_params("s", shop="evil.example.com", signed=False))

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid shop domain"

    @responses.activate
    def test_missing_access_token_is_fatal(self, client, token_store):
        state = start_install(client)
        responses.add(responses.POST, TOKEN_URL, json={"scope": "read_orders"})

        response = client.get("/auth/callback", params=callback_params(state))

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to complete OAuth flow"
        assert token_store.get_all_shops() == []

    @responses.activate
    def test_upstream_error_status_is_propagated(self, client, token_store):
        state = start_install(client)
        responses.add(responses.POST, TOKEN_URL, json={"error": "invalid_request"}, status=400)

        response = client.get("/auth/callback", params=callback_params(state))

        assert response.status_code == 400
        body = response.json()
        assert body["details"] == {"error": "invalid_request"}
        assert body["auth_url"] == f"{TEST_BASE_URL}/auth?shop={TEST_SHOP}"
        assert token_store.get_all_shops() == []

    @responses.activate
    def test_save_failure_is_fatal(self, client, monkeypatch, tmp_path):
        monkeypatch.setattr(config, "SHOPS_FILE", str(tmp_path / "no-such-dir" / "shops.json"))
        state = start_install(client)
        responses.add(responses.POST, TOKEN_URL, json={"access_token": "shpat_new"})

        response = client.get("/auth/callback", params=callback_params(state))

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to save access token"

    def test_merchant_declined(self, client):
        state = start_install(client)

        response = client.get("/auth/callback", params={
            "shop": TEST_SHOP,
            "state": state,
            "error": "access_denied",
            "error_description": "The merchant declined",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "Authorization failed"
        assert shopify_auth.nonces.get(state) is None

    def test_incomplete_config_fails_closed(self, client, monkeypatch):
        monkeypatch.setattr(config, "SHOPIFY_API_SECRET", None)

        response = client.get("/auth/callback", params=callback_params("s", signed=False))

        assert response.status_code == 500
        assert response.json()["error"] == "Server configuration error"
