import json

from fastapi import APIRouter, Request, Header

from core import config
from core.shops import Shops
from core.Logger import AppLogger
from core.shop_validator import validate_shop_domain
from core.exceptions import AuthError, ValidationError
from core.helpers.shopify_auth import verify_webhook_hmac

router = APIRouter(prefix="/webhooks/shopify")
logger = AppLogger()
shops = Shops()

# --- Webhook Topic Handlers ---

def handle_app_uninstalled(shop_domain: str, payload: dict):
    if shops.remove_shop(shop_domain):
        logger.log(
            event="shop_deleted_via_uninstall",
            data={"message": "🧹 Shop token removed after uninstall webhook."},
            store=shop_domain,
            level="info"
        )
    else:
        logger.log(
            event="uninstall_unknown_shop",
            data={"message": "⚠️ Uninstall webhook received for unknown shop."},
            store=shop_domain,
            level="warning"
        )

# --- Webhook Topic Registry ---

WEBHOOK_HANDLERS = {
    "app/uninstalled": handle_app_uninstalled,
}

# --- Central Webhook Endpoint ---

@router.post("/{topic:path}")
async def handle_shopify_webhook(
    topic: str,
    request: Request,
    x_shopify_hmac_sha256: str = Header(None),
    x_shopify_shop_domain: str = Header(None)
):
    raw_body = await request.body()

    if not verify_webhook_hmac(x_shopify_hmac_sha256, raw_body, config.SHOPIFY_API_SECRET):
        logger.log(
            event="webhook_invalid_hmac",
            data={"message": "⚠️ Invalid HMAC received from Shopify.", "topic": topic},
            level="warning"
        )
        raise AuthError("Invalid HMAC signature")

    validation = validate_shop_domain(x_shopify_shop_domain)
    if not validation.valid:
        raise ValidationError("Missing or invalid shop domain header", error="Invalid shop domain")

    if topic not in WEBHOOK_HANDLERS:
        logger.log(
            event="webhook_topic_not_supported",
            data={"message": f"⚠️ Webhook topic not supported: {topic}"},
            store=validation.normalized,
            level="warning"
        )
        raise ValidationError(f"Unsupported webhook topic: {topic}", error="Unsupported webhook topic")

    try:
        payload = json.loads(raw_body) if raw_body else {}
    except ValueError:
        logger.log(
            event="webhook_invalid_payload",
            data={"message": "⚠️ Webhook body is not valid JSON.", "topic": topic},
            store=validation.normalized,
            level="warning"
        )
        raise ValidationError("Invalid JSON payload")

    logger.log(
        event="webhook_received",
        level="debug",
        store=validation.normalized,
        data={"topic": topic}
    )

    WEBHOOK_HANDLERS[topic](validation.normalized, payload)

    return {"status": "ok", "message": f"✅ Webhook '{topic}' handled"}
