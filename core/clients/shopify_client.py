# core/clients/shopify_client.py

import requests
from typing import Dict, Any

from core import config
from core.exceptions import ConfigurationError, ShopifyConnectionError, ShopifyGraphQLError, ShopifyHttpError
from core.Logger import AppLogger
from core.shops import Shops
from core.shopify_graphql.queries import GET_SHOP_QUERY


class ShopifyClient:
    """
    Admin API client bound to one shop and its stored access token.
    Responses are never cached and requests are never retried.
    """

    def __init__(self, shop_domain: str, shops=None, logger: AppLogger = None):
        self.shops = shops or Shops()
        self.logger = logger or AppLogger()
        self.domain = shop_domain
        self.token = self.shops.get_token(shop_domain)

        if not self.token:
            self.logger.log(
                event="shopify_token_missing",
                level="error",
                store=self.domain,
                data={"message": "❌ Cannot initialize ShopifyClient, access token is missing."}
            )
            raise ConfigurationError(f"Access token missing for {self.domain}")

        self.base_url = f"https://{self.domain}/admin/api/{config.SHOPIFY_API_VERSION}/"
        self.endpoint = f"{self.base_url}graphql.json"
        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-Shopify-Access-Token": self.token,
        }
        self.timeout = config.SHOPIFY_HTTP_TIMEOUT

    def _request(self, method: str, url: str, json: dict = None, params: dict = None) -> requests.Response:
        try:
            response = requests.request(
                method, url, headers=self.headers, json=json, params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.log("❌ shopify_request_failed", {
                "method": method,
                "url": url,
                "error": str(e)
            }, store=self.domain, level="error")
            raise ShopifyConnectionError(str(e), original_exception=e)

        if not response.ok:
            details = _response_body(response)
            self.logger.log("❌ shopify_http_error", {
                "method": method,
                "url": url,
                "status_code": response.status_code,
                "details": details
            }, store=self.domain, level="error")
            raise ShopifyHttpError(response.status_code, details)

        return response

    def rest(self, method: str, path: str, json: dict = None, params: dict = None) -> dict:
        url = f"{self.base_url}{path.lstrip('/')}"
        response = self._request(method, url, json=json, params=params)
        return _response_body(response)

    def graphql(self, query: str, variables: Dict[str, Any] = None) -> Dict[str, Any]:
        response = self._request("POST", self.endpoint, json={"query": query, "variables": variables or {}})

        json_data = _response_body(response)
        if not isinstance(json_data, dict):
            raise ShopifyGraphQLError([{"message": "Invalid JSON from Shopify"}])

        if json_data.get("errors"):
            self.logger.log(
                event="❌ shopify_graphql_error",
                level="error",
                store=self.domain,
                data={"errors": json_data["errors"]}
            )
            raise ShopifyGraphQLError(json_data["errors"])

        return json_data.get("data")

    def get_orders(self, limit: int, status: str = "any") -> list[dict]:
        result = self.rest("GET", "orders.json", params={"limit": limit, "status": status})
        orders = result.get("orders", []) if isinstance(result, dict) else []
        self.logger.log("shopify_orders_fetched", {
            "count": len(orders),
            "limit": limit,
            "status": status
        }, store=self.domain)
        return orders

    def get_order(self, order_id: str) -> dict:
        result = self.rest("GET", f"orders/{order_id}.json")
        return result.get("order") if isinstance(result, dict) else None

    def get_shop_info(self) -> dict:
        data = self.graphql(GET_SHOP_QUERY)
        return (data or {}).get("shop", {})


def _response_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text
