"""Client for the skills.sh directory API.

Endpoints (all GET, JSON):
    /search?q=<query>&limit=&offset=   ``{"skills": [...], "hasMore": bool}``
    /skills?limit=&offset=             popular skills, same shape
    /skill/<id>                        one skill object
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from agentstudio.exceptions import SkillStoreError
from agentstudio.store.http_client import DEFAULT_TIMEOUT, fetch_json
from agentstudio.store.models import PaginatedSkills, SkillSearchResult

logger = logging.getLogger(__name__)

SKILLS_API_BASE = "https://skills.sh/api"
DEFAULT_LIMIT = 50


def _paginated(data: Any) -> PaginatedSkills:  # noqa: ANN401
    if not isinstance(data, dict) or not isinstance(data.get("skills"), list):
        raise SkillStoreError("Failed to parse skills response: missing 'skills' list")
    skills = [SkillSearchResult.from_api(item) for item in data["skills"] if isinstance(item, dict)]
    return PaginatedSkills(skills=skills, has_more=bool(data.get("hasMore", False)))


class SkillStoreClient:
    """Async access to the remote skill directory.

    Usage::

        client = SkillStoreClient()
        page = asyncio.run(client.search_skills("sentry"))
        for skill in page.skills:
            print(skill.name, skill.installs)
    """

    def __init__(
        self,
        base_url: str = SKILLS_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Any = None,  # noqa: ANN401
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _get(self, path: str, params: dict[str, str | int] | None, what: str) -> Any:  # noqa: ANN401
        url = f"{self.base_url}{path}"
        logger.debug("GET %s %s", url, params or "")
        return await fetch_json(
            url, params=params, timeout=self.timeout, what=what, transport=self._transport
        )

    async def search_skills(
        self, query: str, limit: int = DEFAULT_LIMIT, offset: int = 0
    ) -> PaginatedSkills:
        """Full-text search over the skill directory."""
        data = await self._get(
            "/search", {"q": query, "limit": limit, "offset": offset}, "skills"
        )
        return _paginated(data)

    async def get_popular_skills(
        self, limit: int = DEFAULT_LIMIT, offset: int = 0
    ) -> PaginatedSkills:
        """List skills ordered by install count."""
        data = await self._get("/skills", {"limit": limit, "offset": offset}, "popular skills")
        return _paginated(data)

    async def get_skill_details(self, skill_id: str) -> SkillSearchResult:
        """Fetch a single skill by id."""
        data = await self._get(f"/skill/{quote(skill_id, safe='')}", None, "skill details")
        if not isinstance(data, dict):
            raise SkillStoreError("Failed to parse skill details: expected an object")
        return SkillSearchResult.from_api(data)
