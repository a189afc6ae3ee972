"""
Logging utilities for the search function.

Provides standardized logger configuration following security and privacy rules.

CRITICAL SECURITY RULES:
- NEVER log the Gemini API key (it travels in the request URL as ?key=...)
- NEVER log full user queries (truncate to 50 characters)
- NEVER return stack traces or raw upstream error bodies to the caller

Acceptable logging:
- High-level events (e.g., "Calling Gemini API with Google Search grounding...")
- Non-sensitive metadata (e.g., "finish_reason=STOP", "products=3")
- Upstream error bodies (server-side only)
"""

import logging
import re
from typing import Optional

_API_KEY_PATTERN = re.compile(r"([?&]key=)[^&\s\"']+")


def redact_api_keys(text: str) -> str:
    """Replace the value of any ``key=`` query parameter with ``***``."""
    return _API_KEY_PATTERN.sub(r"\1***", text)


class ApiKeyRedactionFilter(logging.Filter):
    """
    Strip API keys out of log records.

    httpx logs every request URL at INFO level, and the Gemini REST API takes
    the key as a query parameter, so without this filter the key would end
    up in the function logs.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_api_keys(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from search_backend.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        handler.addFilter(ApiKeyRedactionFilter())
        logger.addHandler(handler)

    return logger


def configure_logging(level_name: str = "INFO") -> None:
    """
    Configure root logging for the function process.

    Installs the API key redaction filter on every root handler and on the
    httpx logger itself.
    """
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    redaction_filter = ApiKeyRedactionFilter()
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, ApiKeyRedactionFilter) for f in handler.filters):
            handler.addFilter(redaction_filter)

    httpx_logger = logging.getLogger("httpx")
    if not any(isinstance(f, ApiKeyRedactionFilter) for f in httpx_logger.filters):
        httpx_logger.addFilter(redaction_filter)
