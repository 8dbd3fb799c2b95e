"""
Shared dependencies for commands.
"""

import logging

import httpx

from fleetctl.core.config import Settings
from fleetctl.core.exceptions import AuthError

logger = logging.getLogger(__name__)


def require_token(settings: Settings) -> str:
    """
    Return the configured API token.

    Raises:
        AuthError: If no token is configured
    """
    if not settings.API_TOKEN:
        raise AuthError("You have to log in to continue (set FLEET_API_TOKEN)")
    return settings.API_TOKEN


def create_http_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """
    Create the HTTP client used for API requests.
    The caller owns the client and must close it.

    Args:
        settings: Application settings
        transport: Optional transport override (used by tests)
    """
    token = require_token(settings)
    logger.debug(f"Creating HTTP client for {settings.API_URL}")
    return httpx.AsyncClient(
        base_url=settings.API_URL,
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        },
        timeout=settings.REQUEST_TIMEOUT,
        follow_redirects=True,
        transport=transport,
    )
