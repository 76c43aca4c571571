import time
import uuid

import structlog
from fastapi import Request

from src.api.core.constants import SKIP_LOGGING_PATHS, WALLET_ADDRESS_HEADER
from src.utils.logger import get_client_ip, get_logger

logger = get_logger(__name__)


async def logging_middleware(request: Request, call_next):
    start_time = time.time()

    if request.url.path in SKIP_LOGGING_PATHS:
        return await call_next(request)

    structlog.contextvars.clear_contextvars()
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    ip_address = get_client_ip(request)
    structlog.contextvars.bind_contextvars(
        ip_address=ip_address,
        method=request.method,
        path=request.url.path,
        request_id=request_id,
    )
    wallet_address = request.headers.get(WALLET_ADDRESS_HEADER)
    if wallet_address:
        structlog.contextvars.bind_contextvars(wallet_address=wallet_address.lower())

    response = await call_next(request)

    process_time = time.time() - start_time

    logger.info(
        "request",
        status_code=response.status_code,
        duration=int(process_time * 1000),
    )
    response.headers["X-Request-ID"] = request_id

    return response
