"""
Client for the HR backend's organization tree endpoint (GET {base_url}/org/tree).
Upstream failures never propagate: the chart renders empty instead of crashing.
"""

from typing import Any, List, Optional, Tuple

import httpx
from loguru import logger

DEFAULT_TIMEOUT = 10.0


async def fetch_org_tree_result(
    base_url: str,
    token: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Tuple[List[Any], Optional[str]]:
    """
    Fetch the nested department tree. Returns (tree, error).
    On network error, non-2xx status, invalid JSON or a non-list body: ([], message).
    """
    if not base_url:
        return [], "Upstream base URL is not configured"
    url = f"{base_url.rstrip('/')}/org/tree"
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(url, headers=headers)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        message = _error_message(e.response) or f"Upstream returned {e.response.status_code}"
        logger.warning("Org tree request failed: {} {}", e.response.status_code, url)
        return [], message
    except httpx.HTTPError as e:
        logger.warning("Org tree request to {} failed: {}", url, e)
        return [], "Unable to reach organization service"
    except ValueError as e:
        logger.warning("Org tree response from {} is not JSON: {}", url, e)
        return [], "Invalid organization data"

    if not isinstance(data, list):
        logger.warning("Org tree response from {} is not a list: {}", url, type(data).__name__)
        return [], "Invalid organization data"
    return data, None


def _error_message(response: httpx.Response) -> Optional[str]:
    """Backend errors look like {"message": "..."}."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
