# core/helpers/shopify_auth.py

import base64
import hashlib
import hmac
import secrets
from urllib.parse import urlencode

import shopify

from core import config


def generate_nonce() -> str:
    # 16 random bytes -> 128 bits of entropy
    return secrets.token_hex(16)


def get_callback_url() -> str:
    return f"{config.get_app_base_url()}/auth/callback"


def get_install_path(shop_domain: str) -> str:
    """
    Absolute URL a client can follow to (re)start the OAuth flow for a shop.
    """
    return f"{config.get_app_base_url()}/auth?{urlencode({'shop': shop_domain})}"


def get_scopes() -> list:
    return [scope.strip() for scope in (config.SHOPIFY_SCOPES or "").split(",") if scope.strip()]


def setup_session(secret: str = None):
    shopify.Session.setup(api_key=config.SHOPIFY_API_KEY, secret=secret or config.SHOPIFY_API_SECRET)


def build_install_url(shop_domain: str, state: str) -> str:
    """
    Shopify's authorize screen for `shop_domain`, with `state` bound to the nonce.
    """
    setup_session()
    session = shopify.Session(shop_domain, config.SHOPIFY_API_VERSION)
    return session.create_permission_url(scope=get_scopes(), redirect_uri=get_callback_url(), state=state)


def signed_params(params: dict) -> dict:
    # Legacy `signature` is not part of the signed message
    return {key: value for key, value in params.items() if key != "signature"}


def calculate_oauth_hmac(params: dict, secret: str) -> str:
    setup_session(secret)
    return shopify.Session.calculate_hmac(signed_params(params))


def verify_oauth_hmac(params: dict, secret: str) -> bool:
    """
    Check the `hmac` query param Shopify appends to OAuth redirects.
    """
    if not params.get("hmac") or not secret:
        return False
    setup_session(secret)
    return shopify.Session.validate_hmac(signed_params(params))


def verify_webhook_hmac(hmac_header: str, body: bytes, secret: str) -> bool:
    if not hmac_header or not secret:
        return False
    digest = hmac.new(secret.encode(), body, hashlib.sha256).digest()
    calc_hmac = base64.b64encode(digest).decode()
    return hmac.compare_digest(calc_hmac, hmac_header)
