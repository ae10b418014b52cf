# routes/shops.py

from fastapi import APIRouter

from core.Logger import AppLogger
from core.shops import Shops
from core.shop_validator import validate_shop_domain
from core.exceptions import GatewayError, NotFoundError, ValidationError

router = APIRouter(prefix="/shops")
logger = AppLogger()
shops = Shops()


@router.get("")
def list_shops():
    installed = []
    for shop_domain in shops.get_all_shops():
        record = shops.get_record(shop_domain) or {}
        installed.append({"shop": shop_domain, "installed_at": record.get("installed_at")})

    return {"ok": True, "count": len(installed), "shops": installed}


@router.delete("/{shop_domain}")
def uninstall_shop(shop_domain: str):
    validation = validate_shop_domain(shop_domain)
    if not validation.valid:
        raise ValidationError(validation.error, error="Invalid shop domain", extra={"received": shop_domain})

    shop_domain = validation.normalized
    if shops.get_record(shop_domain) is None:
        raise NotFoundError(f"The shop {shop_domain} is not installed.", error="Shop not installed")

    if not shops.remove_shop(shop_domain):
        raise GatewayError("Failed to remove shop token", error="Failed to uninstall shop")

    logger.log(
        event="shop_uninstalled",
        level="info",
        store=shop_domain,
        data={"message": "🧹 Shop token removed via API."}
    )

    return {"ok": True, "shop": shop_domain, "removed": True}
