"""Shared httpx client factory for outbound API calls."""

import httpx

from impact_scanner.config import BoaviztaConfig


def create_async_client(config: BoaviztaConfig) -> httpx.AsyncClient:
    """Create an async client bound to the Boavizta API.

    Proxy settings are read from the environment (HTTPS_PROXY etc.).
    """
    return httpx.AsyncClient(
        base_url=config.api_url,
        timeout=httpx.Timeout(config.timeout_seconds),
        headers={"Accept": "application/json"},
        trust_env=True,
    )
