"""
Shared async JSON GET used by the HTTP market data providers.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


async def fetch_json(url: str, params: Optional[dict] = None, timeout: float = 10.0) -> Optional[dict]:
    """
    GET url and decode a JSON object.

    Returns None on transport errors, timeouts, non-200 responses or
    bodies that are not a JSON object.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, params=params, headers={"Accept": "application/json"})
            if response.status_code != 200:
                logger.debug(f"GET {url} returned {response.status_code}: {response.text[:200]}")
                return None
            payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.debug(f"GET {url} failed: {exc!r}")
        return None

    if not isinstance(payload, dict):
        logger.debug(f"GET {url} returned non-object JSON")
        return None
    return payload
