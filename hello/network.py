"""
Public IP lookup over plain-text "what is my IP" services.

Endpoints are tried in order, once each. The first non-empty response
body wins. There is no retry or backoff.
"""

from typing import Optional, Sequence

import httpx

from hello.config import HTTP_TIMEOUT, IP_DETAILS_BASE_URL, parse_ip_endpoints
from hello.logger import logger


async def fetch_public_ip(
    endpoints: Optional[Sequence[str]] = None,
    timeout: float = HTTP_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[str]:
    """
    Fetch this host's public IP address as text.

    Args:
        endpoints: URLs returning the caller's IP as a plain-text body
            (default: IP_ENDPOINTS from config)
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (used by tests)

    Returns:
        IP string with surrounding whitespace removed, or None if every
        endpoint failed or returned an empty body
    """
    if endpoints is None:
        endpoints = parse_ip_endpoints()

    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        for endpoint in endpoints:
            try:
                response = await client.get(endpoint)
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.warning(f"Public IP lookup failed at {endpoint}: {e}")
                continue

            text = response.text.strip()
            if text:
                logger.info(f"Public IP resolved via {endpoint}")
                return text

            logger.warning(f"Public IP lookup at {endpoint} returned an empty body")

    logger.error(f"Public IP lookup failed on all {len(endpoints)} endpoints")
    return None


def ip_details_url(ip: Optional[str], base_url: str = IP_DETAILS_BASE_URL) -> Optional[str]:
    """Web page with details about an IP, or None when no IP is known."""
    if not ip:
        return None
    return f"{base_url.rstrip('/')}/{ip}"
