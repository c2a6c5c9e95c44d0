from __future__ import annotations

import logging
from typing import Sequence

from ..core.constants import STAGING_CACHE_KEY
from .cache import StagingCache
from .model import StagedUser

logger = logging.getLogger(__name__)


class StagingService:
    """Holds the users picked in the add-user dialog for one browser session."""

    def __init__(self, cache: StagingCache, *, namespace: str = "studentreports"):
        self._cache = cache
        self._namespace = namespace

    def _key(self, token: str) -> str:
        return f"{self._namespace}:{token}:{STAGING_CACHE_KEY}"

    def stage(self, token: str, users: Sequence[StagedUser]) -> None:
        """Replace the staged list for this session."""
        self._cache.set(self._key(token), [u.to_dict() for u in users])
        logger.debug("Staged %d user(s) for session %s", len(users), token)

    def staged(self, token: str) -> list[StagedUser]:
        raw = self._cache.get(self._key(token)) or []
        return [StagedUser.from_dict(item) for item in raw]

    def clear(self, token: str) -> None:
        self._cache.delete(self._key(token))
