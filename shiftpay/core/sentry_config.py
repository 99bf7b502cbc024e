# shiftpay/core/sentry_config.py
"""
Sentry configuration for error tracking in production.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from shiftpay.core.config import IS_PRODUCTION

logger = logging.getLogger(__name__)

RELEASE = "shiftpay@0.1.0"


def init_sentry(production: bool = IS_PRODUCTION) -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry was initialized, False otherwise.
    """
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not production:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning("SENTRY_DSN not set. Error tracking disabled.")
        return False

    sentry_sdk.init(
        dsn=sentry_dsn,
        integrations=[
            FastApiIntegration(),
            StarletteIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=0.1,
        sample_rate=1.0,
        release=os.getenv("RELEASE_VERSION", RELEASE),
        environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
        send_default_pii=False,
        before_send=before_send_hook,
    )

    logger.info(f"Sentry initialized (environment: {os.getenv('SENTRY_ENVIRONMENT', 'production')})")
    return True


def before_send_hook(event, hint):
    """
    Filter sensitive data before sending to Sentry.

    Shift times and wages are personal data; request bodies are dropped and
    salary figures in extra context are masked.
    """
    request = event.get("request")
    if request:
        request.pop("data", None)
        headers = request.get("headers")
        if headers:
            for header in ("cookie", "authorization"):
                if header in headers:
                    headers[header] = "[Filtered]"

    extra = event.get("extra")
    if extra:
        for key in list(extra):
            if "rate" in key or "earned" in key:
                extra[key] = "[Filtered]"

    return event


def capture_exception(error: Exception, context: dict | None = None) -> None:
    """
    Capture an exception to Sentry with additional context.

    A no-op when Sentry is not initialized.
    """
    if context:
        with sentry_sdk.new_scope() as scope:
            for key, value in context.items():
                scope.set_context(key, value)
            sentry_sdk.capture_exception(error)
    else:
        sentry_sdk.capture_exception(error)
