# core/shop_validator.py

import re
from typing import NamedTuple, Optional

SHOP_DOMAIN_REGEX = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?\.myshopify\.com$")

EMPTY_SHOP_ERROR = "Shop parameter is empty or invalid type"
INVALID_SHOP_ERROR = "Shop must be a valid .myshopify.com domain"


class ShopValidation(NamedTuple):
    valid: bool
    normalized: Optional[str]
    original: object
    error: Optional[str]


def normalize_shop_domain(shop) -> Optional[str]:
    """
    Normalize a shop identifier to `name.myshopify.com`:
    - Trim whitespace
    - Strip a leading http:// or https://
    - Drop any path after the domain
    - Lowercase
    Returns None for empty or non-string input.
    """
    if not shop or not isinstance(shop, str):
        return None

    normalized = shop.strip()
    normalized = re.sub(r"^https?://", "", normalized, flags=re.IGNORECASE)
    normalized = normalized.split("/")[0]
    normalized = normalized.rstrip("/").strip().lower()

    return normalized or None


def is_valid_shop_domain(shop) -> bool:
    normalized = normalize_shop_domain(shop)
    if not normalized:
        return False
    return SHOP_DOMAIN_REGEX.fullmatch(normalized) is not None


def validate_shop_domain(shop) -> ShopValidation:
    normalized = normalize_shop_domain(shop)

    if not normalized:
        return ShopValidation(valid=False, normalized=None, original=shop, error=EMPTY_SHOP_ERROR)

    if not SHOP_DOMAIN_REGEX.fullmatch(normalized):
        return ShopValidation(valid=False, normalized=normalized, original=shop, error=INVALID_SHOP_ERROR)

    return ShopValidation(valid=True, normalized=normalized, original=shop, error=None)
