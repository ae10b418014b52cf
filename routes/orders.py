# routes/orders.py

from fastapi import APIRouter

from core.Logger import AppLogger
from core.shops import Shops
from core.orders import OrderPresenter, clamp_limit
from core.shop_validator import validate_shop_domain
from core.clients.shopify_client import ShopifyClient
from core.helpers.shopify_auth import get_install_path
from core.exceptions import (
    AuthError,
    GatewayError,
    NotFoundError,
    ShopifyConnectionError,
    ShopifyHttpError,
    ValidationError,
)

router = APIRouter(prefix="/orders")
logger = AppLogger()
shops = Shops()


def resolve_shop(shop: str) -> str:
    """
    Validate the `shop` query param and make sure it has completed OAuth.
    Returns the normalized domain.
    """
    if not shop:
        raise ValidationError(
            "Missing required parameter: shop",
            extra={"example": "/v1/orders?shop=tienda.myshopify.com"}
        )

    validation = validate_shop_domain(shop)
    if not validation.valid:
        raise ValidationError(
            validation.error,
            error="Invalid shop domain",
            extra={"received": shop, "normalized": validation.normalized}
        )

    shop_domain = validation.normalized
    if not shops.is_authenticated(shop_domain):
        raise AuthError(
            f"The shop {shop_domain} has not completed OAuth. Please install the app first.",
            error="Shop not installed",
            extra={"auth_url": get_install_path(shop_domain)}
        )

    return shop_domain


def upstream_error(error: GatewayError, shop_domain: str) -> GatewayError:
    if isinstance(error, ShopifyHttpError):
        if error.status == 401:
            return AuthError(
                "The access token is no longer valid. Please re-authenticate.",
                error="Invalid or expired token",
                extra={"auth_url": get_install_path(shop_domain)}
            )
        if error.status == 403:
            return AuthError(
                "The app does not have permission to read orders. Check your scopes.",
                error="Insufficient permissions",
                status_code=403
            )
    return error


@router.get("")
def list_orders(shop: str = None, limit: str = None, status: str = "any"):
    shop_domain = resolve_shop(shop)
    limit = clamp_limit(limit)

    try:
        client = ShopifyClient(shop_domain, shops=shops, logger=logger)
        orders = client.get_orders(limit=limit, status=status or "any")
    except (ShopifyHttpError, ShopifyConnectionError) as e:
        logger.log("❌ orders_fetch_failed", {"error": e.message}, store=shop_domain, level="error")
        raise upstream_error(e, shop_domain)

    return OrderPresenter.from_config().order_list(shop_domain, orders)


@router.get("/{order_id}")
def get_order(order_id: str, shop: str = None):
    shop_domain = resolve_shop(shop)

    try:
        client = ShopifyClient(shop_domain, shops=shops, logger=logger)
        order = client.get_order(order_id)
    except (ShopifyHttpError, ShopifyConnectionError) as e:
        logger.log("❌ order_fetch_failed", {"order_id": order_id, "error": e.message}, store=shop_domain, level="error")
        if isinstance(e, ShopifyHttpError) and e.status == 404:
            raise NotFoundError("Order not found", error="Order not found", extra={"orderId": order_id})
        raise upstream_error(e, shop_domain)

    if not order:
        raise NotFoundError("Order not found", error="Order not found", extra={"orderId": order_id})

    return OrderPresenter.from_config().single_order(shop_domain, order)
