from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from app.config import DEBOUNCE_TIME_S, HOST, PORT
from app.handler import format_seconds, handle_trigger, parse_headers
from app.logger import logger
from app.models import TriggerResponse
from app.registry import registry

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Debounce window: {format_seconds(DEBOUNCE_TIME_S)}s")
    yield
    dropped = registry.cancel_all()
    if dropped:
        logger.warning(f"Shutting down with {dropped} pending call(s) dropped")
    await registry.drain()


app = FastAPI(title="Webhook Debouncer", lifespan=lifespan)


def _trigger(request: Request) -> TriggerResponse:
    params = request.query_params
    url = params.get("url")
    method = params.get("method")
    logger.info(f"INCOMING REQUEST: {method} {url}")

    return handle_trigger(
        registry,
        url=url,
        method=method,
        headers=parse_headers(params.multi_items()),
        request_id=params.get("id"),
    )


@app.get("/health", response_model=None)
async def health(request: Request) -> dict | TriggerResponse:
    # Every GET path accepts triggers; /health only reports when given none.
    if "url" in request.query_params or "method" in request.query_params:
        return _trigger(request)
    return {"status": "ok", "pending": registry.size}


# Must stay async: registry mutations and timers live on the event loop.
@app.api_route("/{path:path}", methods=_ALL_METHODS, response_model=None)
async def handle_request(path: str, request: Request) -> TriggerResponse | Response:
    if request.method != "GET":
        return Response(status_code=405)
    return _trigger(request)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running on port {PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
