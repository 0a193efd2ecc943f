import json
import logging
import os
import random
import re
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

LOG_SAMPLE_2XX = float(os.getenv("LOG_SAMPLE_2XX", "0.1"))

_TENANT_PATH = re.compile(r"^/api/outlet/([^/]+)/")

logger = logging.getLogger("api")


def tenant_from_path(path: str) -> str | None:
    """Return the tenant id embedded in an outlet route, if any."""

    match = _TENANT_PATH.match(path)
    return match.group(1) if match else None


class LoggingMiddleware(BaseHTTPMiddleware):
    """Emit structured inbound/outbound request logs.

    Successful responses are sampled at ``LOG_SAMPLE_2XX``; every 4xx and 5xx
    is logged.
    """

    async def dispatch(self, request: Request, call_next):
        req_id = getattr(request.state, "request_id", None)
        tenant = tenant_from_path(request.url.path)
        start = time.perf_counter()
        response = await call_next(request)
        dur_ms = int((time.perf_counter() - start) * 1000)
        status = response.status_code

        if 200 <= status < 300 and random.random() >= LOG_SAMPLE_2XX:
            return response

        inbound = {
            "req_id": req_id,
            "tenant": tenant,
            "method": request.method,
            "path": request.url.path,
            "ip": request.client.host if request.client else None,
        }
        outbound = {
            "req_id": req_id,
            "tenant": tenant,
            "route": request.url.path,
            "status": status,
            "latency_ms": dur_ms,
        }
        logger.info(json.dumps(inbound))
        log_fn = logger.error if status >= 500 else logger.info
        log_fn(json.dumps(outbound))
        return response
