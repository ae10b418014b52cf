# core/helpers/bearer_auth.py

import hmac

from fastapi import Header

from core import config
from core.exceptions import AuthError
from core.Logger import AppLogger

logger = AppLogger()


def require_bearer_token(authorization: str = Header(None)):
    """
    Dependency guarding every /v1 route. Fails closed when API_BEARER_TOKEN is not configured.
    """
    expected = config.API_BEARER_TOKEN

    if not expected:
        logger.log(
            event="bearer_token_not_configured",
            level="error",
            data={"message": "❌ API_BEARER_TOKEN is not set, rejecting request."}
        )
        raise AuthError()

    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError()

    token = authorization[len("Bearer "):]
    if not hmac.compare_digest(token.encode(), expected.encode()):
        raise AuthError()
