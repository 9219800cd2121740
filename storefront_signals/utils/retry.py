"""Retry utilities for storefront HTTP requests."""

import logging

import httpx
import structlog
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from storefront_signals.config import settings

logger = structlog.get_logger(__name__)


# Transport failures only: a non-2xx answer is a real answer and is not retried
http_retry = retry(
    stop=stop_after_attempt(settings.HTTP_MAX_ATTEMPTS),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
    retry=retry_if_exception_type(
        (
            httpx.ConnectError,
            httpx.ReadError,
            httpx.TimeoutException,
        )
    ),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
