# transaction_relay/main.py
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
import logging

from .bootstrap import build_relay
from .logging_config import reset_request_id, set_request_id

logger = logging.getLogger(__name__)


def create_app(relay=None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # startup validation, exits the process when configuration is missing
        app.state.relay = relay or build_relay()
        logger.info("app_started")
        yield
        app.state.relay.client.close()

    app = FastAPI(lifespan=lifespan)

    @app.get("/")
    def health():
        return {"status": "HEALTHY", "current_time": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"}

    @app.post("/v1/webhooks/monzo", response_class=PlainTextResponse)
    async def receive_webhook(request: Request):
        """
        Forward one Monzo transaction webhook to YNAB.
        200 with the YNAB status and body, 500 with a literal body on any failure.
        """
        token = set_request_id(request.headers.get("x-request-id") or uuid.uuid4().hex)
        try:
            logger.info("webhook_request")
            body = await request.body()
            result = await run_in_threadpool(request.app.state.relay.handle, body)
            if result.status_code != status.HTTP_200_OK:
                logger.info("webhook_rejected", extra={"status_code": result.status_code})
        finally:
            reset_request_id(token)
        return PlainTextResponse(result.body, status_code=result.status_code)

    return app


app = create_app()
