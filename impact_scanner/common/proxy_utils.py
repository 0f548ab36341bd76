"""Proxy configuration for outbound calls to the impact backend."""

import logging
import os
from urllib.parse import urlsplit
from urllib.request import proxy_bypass_environment

logger = logging.getLogger(__name__)

PROXY_ENV_VARS = (
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "http_proxy",
    "https_proxy",
    "NO_PROXY",
    "no_proxy",
    "ALL_PROXY",
    "all_proxy",
)


def mask_proxy_url(value: str) -> str:
    """Hide the user:password part of a proxy URL."""
    if "@" not in value:
        return value
    return "***@" + value.rsplit("@", 1)[-1]


def configure_proxy_settings(api_url: str | None = None) -> dict[str, str]:
    """Normalise proxy environment variables and log the ones in effect.

    httpx only uses HTTPS_PROXY for https:// URLs, so HTTP_PROXY is copied to
    HTTPS_PROXY when it is the only proxy configured.

    Args:
        api_url: Backend URL to check against NO_PROXY

    Returns:
        Proxy variables that are set, with credentials masked
    """
    http_proxy = os.environ.get("HTTP_PROXY") or os.environ.get("http_proxy")
    https_proxy = os.environ.get("HTTPS_PROXY") or os.environ.get("https_proxy")

    if http_proxy and not https_proxy:
        os.environ["HTTPS_PROXY"] = http_proxy
        logger.info("HTTPS_PROXY not set, copying from HTTP_PROXY")

    settings = {
        var: mask_proxy_url(os.environ[var]) for var in PROXY_ENV_VARS if os.environ.get(var)
    }
    if not settings:
        logger.info("No proxy environment variables detected")
        return settings

    for var, value in settings.items():
        logger.info(f"Proxy env var {var}={value}")

    host = urlsplit(api_url).hostname if api_url else None
    if host and proxy_bypass_environment(host):
        logger.info(f"Calls to {host} bypass the proxy (NO_PROXY)")
    return settings
