# core/exceptions.py

class GatewayError(Exception):
    """
    Base for every error the gateway turns into a JSON response.
    `extra` is merged into the response body next to `error` and `message`.
    """
    status_code = 500
    error = "Internal server error"

    def __init__(self, message=None, error=None, status_code=None, extra=None):
        self.message = message or self.error
        if error:
            self.error = error
        if status_code:
            self.status_code = status_code
        self.extra = extra or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.error, "message": self.message}
        body.update(self.extra)
        return body


class ValidationError(GatewayError):
    status_code = 400
    error = "Invalid request"


class AuthError(GatewayError):
    status_code = 401
    error = "Unauthorized"


class NotFoundError(GatewayError):
    status_code = 404
    error = "Not found"


class ConfigurationError(GatewayError):
    """
    Exception raised when a required setting is missing. Requests fail closed.
    """
    status_code = 500
    error = "Server configuration error"


class ShopifyHttpError(GatewayError):
    """
    Exception raised when Shopify answers with a non-2xx status.
    """
    error = "Shopify API error"

    def __init__(self, status: int, details=None, message=None):
        self.status = status
        self.details = details
        super().__init__(
            message=message or f"Shopify API Error: {status}",
            status_code=status,
            extra={"status": status, "details": details},
        )


class ShopifyGraphQLError(GatewayError):
    """
    Exception raised when a GraphQL response carries an `errors` list, even on HTTP 200.
    """
    status_code = 502
    error = "Shopify GraphQL error"

    def __init__(self, errors):
        self.errors = errors
        super().__init__(message="Shopify GraphQL Error", extra={"details": errors})


class ShopifyConnectionError(GatewayError):
    """
    Exception raised when Shopify cannot be reached (DNS, TLS, timeout...).
    """
    status_code = 500
    error = "Shopify connection error"

    def __init__(self, message, original_exception=None):
        self.original_exception = original_exception
        super().__init__(message=f"Connection error: {message}")


class OAuthError(GatewayError):
    """
    Exception raised when the code-for-token exchange cannot be completed.
    """
    status_code = 500
    error = "Failed to complete OAuth flow"
