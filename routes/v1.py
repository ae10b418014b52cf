# routes/v1.py

from fastapi import APIRouter, Depends

from core.exceptions import NotFoundError
from core.helpers.bearer_auth import require_bearer_token
from routes import orders, shops

# Everything under /v1 sits behind the bearer gate, unknown paths included
router = APIRouter(prefix="/v1", dependencies=[Depends(require_bearer_token)])
router.include_router(orders.router)
router.include_router(shops.router)


@router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def unknown_route(path: str):
    raise NotFoundError(f"No route for /v1/{path}", error="Not found")
