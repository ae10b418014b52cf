import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from core import config
from core.Logger import AppLogger
from core.exceptions import GatewayError
from routes import shopify_auth, shopify_webhooks, v1

# Development echoes events to the console through AppLogger instead
if not config.IS_DEV:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

logger = AppLogger()


def report_missing_config():
    missing = config.missing_required_config()
    if missing:
        logger.log(
            event="config_missing",
            level="error",
            data={
                "missing": missing,
                "message": "❌ Missing required environment variables. /health works, /auth and /v1/* fail closed."
            }
        )
    return missing


@asynccontextmanager
async def lifespan(app: FastAPI):
    report_missing_config()
    logger.log(
        event="server_started",
        level="info",
        data={"port": config.PORT, "api_version": config.SHOPIFY_API_VERSION, "locale": config.ORDERS_LOCALE}
    )
    yield


app = FastAPI(title="Shopify Orders Gateway", lifespan=lifespan)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Route for the root URL
@app.get("/")
def root(request: Request):
    query_params = dict(request.query_params)
    shop = query_params.get("shop")

    # Shopify opens the app with shop + hmac; send it through install
    if shop and query_params.get("hmac"):
        return RedirectResponse(url=f"/auth?{urlencode({'shop': shop})}", status_code=302)

    return {"service": "shopify-orders-gateway", "health": "/health"}


@app.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


app.include_router(shopify_auth.router)
app.include_router(shopify_webhooks.router)
app.include_router(v1.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)
