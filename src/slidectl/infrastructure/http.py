"""Shared httpx client construction and response classification helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from slidectl import __version__

if TYPE_CHECKING:
    from slidectl.config.models import HttpConfig

USER_AGENT = f"slidectl/{__version__}"

AUTH_FAILURE_STATUSES = frozenset({401, 403})


def create_client(
    config: HttpConfig,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Build the client every strategy shares.

    ``config.timeout`` of ``None`` disables timeouts entirely.
    """
    return httpx.Client(
        timeout=httpx.Timeout(config.timeout),
        headers={"User-Agent": USER_AGENT},
        follow_redirects=config.follow_redirects,
        transport=transport,
    )


def is_auth_failure(response: httpx.Response) -> bool:
    return response.status_code in AUTH_FAILURE_STATUSES
