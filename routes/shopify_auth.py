# routes/shopify_auth.py

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from core import config
from core.Logger import AppLogger
from core.cache import Cache
from core.shops import Shops
from core.shop_validator import validate_shop_domain
from core.clients.shopify_oauth_client import ShopifyOAuthClient
from core.exceptions import AuthError, ConfigurationError, GatewayError, OAuthError, ValidationError
from core.helpers.shopify_auth import (
    build_install_url,
    generate_nonce,
    get_callback_url,
    get_install_path,
    verify_oauth_hmac,
)

router = APIRouter()
logger = AppLogger()
shops = Shops()
nonces = Cache(ttl_seconds=config.OAUTH_NONCE_TTL_SECONDS)


def require_oauth_config():
    missing = config.missing_oauth_config()
    if missing:
        logger.log(
            event="oauth_config_missing",
            level="error",
            data={"missing": missing, "message": "❌ OAuth configuration incomplete."}
        )
        raise ConfigurationError("Missing OAuth configuration")


def restart_context(shop_domain: str) -> dict:
    return {"auth_url": get_install_path(shop_domain)}


@router.get("/auth")
def install(shop: str = None):
    require_oauth_config()

    if not shop:
        raise ValidationError(
            "Missing required parameter: shop",
            extra={"example": "/auth?shop=tienda.myshopify.com"}
        )

    validation = validate_shop_domain(shop)
    if not validation.valid:
        raise ValidationError(validation.error, error="Invalid shop domain", extra={"received": shop})

    shop_domain = validation.normalized
    state = generate_nonce()
    nonces.set(state, {"shop": shop_domain, "created_at": datetime.now(timezone.utc).isoformat()})

    logger.log(
        event="install_redirect",
        level="info",
        store=shop_domain,
        data={
            "redirect_uri": get_callback_url(),
            "scopes": config.SHOPIFY_SCOPES,
            "message": "🔗 Redirecting merchant to install screen."
        }
    )

    return RedirectResponse(build_install_url(shop_domain, state), status_code=302)


@router.get("/auth/callback")
def callback(request: Request):
    require_oauth_config()

    params = dict(request.query_params)
    shop = params.get("shop")
    code = params.get("code")
    state = params.get("state")

    if params.get("error"):
        # Merchant declined or Shopify rejected the request
        if state:
            nonces.pop(state)
        logger.log(
            event="oauth_denied",
            level="warning",
            store=shop,
            data={"error": params.get("error"), "error_description": params.get("error_description")}
        )
        raise ValidationError(
            params.get("error_description") or params["error"],
            error="Authorization failed",
            extra={"example": "/auth?shop=tienda.myshopify.com"}
        )

    if not shop or not code or not state:
        raise ValidationError(
            "Missing required parameters",
            extra={"required": ["shop", "code", "state"], "example": "/auth?shop=tienda.myshopify.com"}
        )

    validation = validate_shop_domain(shop)
    if not validation.valid:
        raise ValidationError(validation.error, error="Invalid shop domain", extra={"received": shop})

    shop_domain = validation.normalized

    if "hmac" in params and not verify_oauth_hmac(params, config.SHOPIFY_API_SECRET):
        nonces.pop(state)
        logger.log(
            event="oauth_invalid_hmac",
            level="warning",
            store=shop_domain,
            data={"message": "⚠️ Invalid HMAC on OAuth callback."}
        )
        raise AuthError(
            "HMAC validation failed",
            error="Invalid HMAC signature",
            status_code=403,
            extra=restart_context(shop_domain)
        )

    stored = nonces.pop(state)
    if stored is None:
        logger.log("oauth_state_invalid", {"message": "⚠️ State not found or expired."}, store=shop_domain, level="warning")
        raise AuthError(
            "State not found or expired. Please restart the OAuth flow.",
            error="Invalid state parameter",
            status_code=403,
            extra=restart_context(shop_domain)
        )

    if stored["shop"] != shop_domain:
        logger.log("oauth_shop_mismatch", {
            "expected": stored["shop"],
            "message": "⚠️ Callback shop does not match the install request."
        }, store=shop_domain, level="warning")
        raise AuthError(
            "The shop in callback does not match the original request.",
            error="Shop mismatch",
            status_code=403,
            extra=restart_context(shop_domain)
        )

    try:
        logger.log("oauth_token_exchange", {"message": "🔄 Exchanging code for access token."}, store=shop_domain)
        token = ShopifyOAuthClient(shop_domain, logger=logger).exchange_token(code)
    except GatewayError as e:
        e.extra.update(restart_context(shop_domain))
        raise

    if not shops.save_token(shop_domain, token):
        raise OAuthError("Failed to save access token", extra=restart_context(shop_domain))

    logger.log(
        event="shop_installed",
        level="success",
        store=shop_domain,
        data={"message": "✅ Shop authenticated successfully.", "token_saved": True}
    )

    return {
        "success": True,
        "message": "Shop authenticated successfully",
        "shop": shop_domain
    }
