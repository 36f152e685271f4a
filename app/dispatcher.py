"""Outbound webhook delivery.

One attempt per call: failures are logged and dropped, never retried or
re-queued. The caller only uses the returned flag for logging.
"""

import httpx

from app.config import DISPATCH_TIMEOUT_SECONDS
from app.logger import log_dispatch, logger
from app.models import WebhookTarget


async def dispatch(
    target: WebhookTarget, client: httpx.AsyncClient | None = None
) -> bool:
    """Call the target once. Returns True on a non-error response."""
    method = target.method.upper()
    logger.info(f"Send to: {method} {target.url}")

    try:
        if client is None:
            async with httpx.AsyncClient(
                timeout=DISPATCH_TIMEOUT_SECONDS, follow_redirects=True
            ) as owned:
                resp = await owned.request(method, target.url, headers=target.headers)
        else:
            resp = await client.request(method, target.url, headers=target.headers)
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        log_dispatch(
            method,
            target.url,
            "failed",
            detail=f"Failed to fetch {target.url}",
            status_code=e.response.status_code,
        )
        return False
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        log_dispatch(
            method,
            target.url,
            "failed",
            detail=f"Failed to fetch {target.url}: {type(e).__name__}: {e}",
        )
        return False

    log_dispatch(method, target.url, "delivered", status_code=resp.status_code)
    return True
