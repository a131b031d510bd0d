import logging
from typing import Dict, Optional

import httpx

from app.errors import ContentTransportError

logger = logging.getLogger(__name__)


def build_client(
    timeout: float, headers: Optional[Dict[str, str]] = None
) -> httpx.Client:
    return httpx.Client(
        timeout=httpx.Timeout(timeout, connect=5.0),
        headers=headers or {},
    )


def fetch_json(client: httpx.Client, url: str, params=None, *, source: str) -> dict:
    """
    GET a JSON document from a CMS.
    Transport failures and non-success statuses raise ContentTransportError.
    """
    try:
        response = client.get(url, params=params)
    except httpx.RequestError as e:
        logger.error(f"HTTP connection error talking to {source}: {e}")
        raise ContentTransportError(f"Failed to reach {source}: {e}") from e

    if not response.is_success:
        raise ContentTransportError(
            f"Failed to fetch posts from {source}: {response.status_code}",
            status_code=response.status_code,
        )

    logger.debug(f"{source} answered {response.status_code} for {response.url}")
    try:
        return response.json()
    except ValueError as e:
        raise ContentTransportError(
            f"{source} returned a non-JSON body: {e}",
            status_code=response.status_code,
        ) from e
