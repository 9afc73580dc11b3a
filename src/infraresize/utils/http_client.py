# src/infraresize/utils/http_client.py

import logging
from typing import Optional

import httpx

from ..core.config import config

logger = logging.getLogger(__name__)


def get_async_http_client(
    base_url: str = "",
    token: Optional[str] = None,
    connect_timeout: float = None,
    read_timeout: float = None,
) -> httpx.AsyncClient:
    """
    Returns an httpx.AsyncClient for template downloads and OCM API calls.

    `base_url` lets OCM callers post to API paths directly. When `token` is
    given every request carries it as a bearer Authorization header, so only
    pass it for clients that talk to OCM.
    """
    c_timeout = connect_timeout if connect_timeout is not None else config.DEFAULT_TIMEOUT_CONNECT
    r_timeout = read_timeout if read_timeout is not None else config.DEFAULT_TIMEOUT_READ

    headers = {"User-Agent": config.USER_AGENT, "Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(r_timeout, connect=c_timeout),
        headers=headers,
        follow_redirects=True,
    )
