# scripts/manage_shops.py

import argparse
from pprint import pprint
from core.shops import Shops
from core.shop_validator import validate_shop_domain
from core.clients.shopify_client import ShopifyClient
from core.exceptions import GatewayError


def list_shops(shops: Shops):
    domains = shops.get_all_shops()
    if not domains:
        print("⚠️ No shops installed.")
        return

    print(f"📦 {len(domains)} installed shop(s):")
    for domain in domains:
        record = shops.get_record(domain) or {}
        print(f"- {domain} (installed {record.get('installed_at', 'unknown')})")


def remove_shop(shops: Shops, shop_domain: str) -> bool:
    if shops.remove_shop(shop_domain):
        print(f"🗑️ Removed {shop_domain}")
        return True
    print(f"❌ {shop_domain} is not installed or the token file could not be written.")
    return False


def verify_shop(shops: Shops, shop_domain: str) -> bool:
    try:
        info = ShopifyClient(shop_domain, shops=shops).get_shop_info()
    except GatewayError as e:
        print(f"❌ Token check failed for {shop_domain}: {e.message}")
        return False

    print(f"✅ Token for {shop_domain} is valid.")
    pprint(info)
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Inspect and manage installed shop tokens.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="List installed shops")
    for name, help_text in (("remove", "Remove a shop token"), ("verify", "Check a shop token against Shopify")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--shop", type=str, required=True, help="Shop domain (e.g. mystore.myshopify.com)")
    args = parser.parse_args(argv)

    shops = Shops()

    if args.command == "list":
        list_shops(shops)
        return 0

    validation = validate_shop_domain(args.shop)
    if not validation.valid:
        print(f"❌ {validation.error}: {args.shop}")
        return 1

    if args.command == "remove":
        return 0 if remove_shop(shops, validation.normalized) else 1
    return 0 if verify_shop(shops, validation.normalized) else 1


if __name__ == "__main__":
    raise SystemExit(main())
