"""Logging of outgoing API requests when NEXTWAVE_LOG_REQUESTS is enabled."""

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

# Query parameters that carry credentials
SENSITIVE_PARAMS = frozenset({"appid", "apikey", "api_key", "token"})
REDACTED = "***REDACTED***"


def should_log_requests() -> bool:
    """Check if request logging is enabled via the NEXTWAVE_LOG_REQUESTS environment variable."""
    return os.getenv("NEXTWAVE_LOG_REQUESTS", "").lower() == "true"


def redact_params(params: dict[str, Any]) -> dict[str, Any]:
    """Replace credential values in query parameters."""
    return {k: REDACTED if k.lower() in SENSITIVE_PARAMS else v for k, v in params.items()}


def build_request_line(url: str, params: dict[str, Any] | None = None) -> str:
    """Build the URL with redacted, sorted query parameters for display."""
    if not params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(redact_params(params).items()))
    return f"{url}&{param_str}" if "?" in url else f"{url}?{param_str}"


def log_api_request(
    api_name: str,
    url: str,
    params: dict[str, Any] | None = None,
    timeout_seconds: float | None = None,
) -> None:
    """Log an outgoing GET request if NEXTWAVE_LOG_REQUESTS is enabled.

    Args:
        api_name: Short name of the upstream API (for example "transport" or "weather").
        url: Request URL without query string.
        params: Query parameters; credentials are redacted.
        timeout_seconds: Total timeout applied to the request, if any.
    """
    if not should_log_requests():
        return

    line = f"[{api_name}] GET {build_request_line(url, params)}"
    if timeout_seconds is not None:
        line += f" (timeout {timeout_seconds:g}s)"
    logger.info(line)
