"""Async HTTP helper for the remote skill directory.

A thin wrapper around ``httpx.AsyncClient`` with a fixed timeout and
user-agent. httpx is an optional dependency (the ``store`` extra) and is
imported lazily so that discovery and entity operations work without it.

Raises ``SkillStoreError`` on any HTTP status, transport or decoding
failure.
"""

from __future__ import annotations

import logging
from typing import Any

from agentstudio.exceptions import SkillStoreError

logger = logging.getLogger(__name__)

# Timeout for all skill directory requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = "AgentStudio/0.1.0"


def _ensure_httpx() -> Any:  # noqa: ANN401
    """Lazily import httpx and raise a friendly error if missing.

    Returns:
        The ``httpx`` module.

    Raises:
        SystemExit: If httpx is not installed.
    """
    try:
        import httpx  # noqa: F811

        return httpx
    except ImportError:
        raise SystemExit(
            "httpx is required for the skill store.\n"
            "Install it with: pip install agent-studio[store]"
        )


async def fetch_json(
    url: str,
    *,
    params: dict[str, str | int] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    what: str = "skills",
    transport: Any = None,  # noqa: ANN401
) -> Any:  # noqa: ANN401
    """Fetch a URL and parse the response as JSON.

    Args:
        url: The URL to fetch.
        params: Optional query parameters.
        timeout: Request timeout in seconds.
        what: Noun used in error messages ("skills", "skill details").
        transport: Optional httpx transport, used by tests.

    Returns:
        Parsed JSON response.

    Raises:
        SkillStoreError: On HTTP errors, timeouts, or invalid JSON.
    """
    httpx = _ensure_httpx()
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            transport=transport,
        ) as client:
            resp = await client.get(url, params=params)
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s", url)
        raise SkillStoreError(f"Failed to fetch {what}: timed out") from exc
    except httpx.RequestError as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise SkillStoreError(f"Failed to fetch {what}: {exc}") from exc

    if resp.status_code >= 400:
        logger.warning("HTTP %d from %s", resp.status_code, url)
        raise SkillStoreError(f"Skills API returned status: {resp.status_code}")

    try:
        return resp.json()
    except ValueError as exc:
        raise SkillStoreError(f"Failed to parse {what} response: {exc}") from exc
