import requests

from core import config
from core.exceptions import ConfigurationError, OAuthError, ShopifyConnectionError, ShopifyHttpError
from core.Logger import AppLogger


class ShopifyOAuthClient:
    """
    Lightweight Shopify client used during OAuth before a token is available.
    Only supports exchanging the authorization code for a permanent access token.
    """

    def __init__(self, domain: str, logger: AppLogger = None):
        if not domain:
            raise ValueError("Shop domain is required for ShopifyOAuthClient.")

        self.domain = domain
        self.api_key = config.SHOPIFY_API_KEY
        self.api_secret = config.SHOPIFY_API_SECRET
        self.timeout = config.SHOPIFY_HTTP_TIMEOUT
        self.logger = logger or AppLogger()

        if not self.api_key or not self.api_secret:
            raise ConfigurationError("Missing OAuth configuration")

        self.token_url = f"https://{self.domain}/admin/oauth/access_token"

    def exchange_token(self, code: str) -> str:
        """
        Exchange authorization code for permanent access token. Never retried.
        """
        payload = {
            "client_id": self.api_key,
            "client_secret": self.api_secret,
            "code": code,
        }

        try:
            response = requests.post(
                self.token_url,
                json=payload,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.log("❌ oauth_token_exchange_failed", {"error": str(e)}, store=self.domain, level="error")
            raise ShopifyConnectionError(str(e), original_exception=e)

        if not response.ok:
            details = _response_body(response)
            self.logger.log("❌ oauth_token_exchange_http_error", {
                "status_code": response.status_code,
                "details": details
            }, store=self.domain, level="error")
            raise ShopifyHttpError(response.status_code, details, message="OAuth token exchange failed")

        body = _response_body(response)
        access_token = body.get("access_token") if isinstance(body, dict) else None
        if not access_token:
            self.logger.log("❌ oauth_token_missing", {
                "message": "No access_token in response"
            }, store=self.domain, level="error")
            raise OAuthError("No access_token in response")

        return access_token


def _response_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text
