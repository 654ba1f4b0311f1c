"""JustWatch client, only used to resolve legacy identifiers."""

import logging
from typing import Iterable, Optional

from app.core.errors import NotFoundError
from app.models.justwatch import JWDetailedMeta, JWExternalId, JWSeasonMetaResult
from app.models.media import MediaType
from app.providers.base import CatalogClient
from app.services.ids import media_type_to_tag

logger = logging.getLogger(__name__)

LOCALE = "en_US"


def pick_external_id(
    external_ids: Iterable[JWExternalId], family: str
) -> Optional[str]:
    """Return the id for ``family``, preferring the ``<family>_latest`` tag."""
    external_ids = list(external_ids)
    for provider in (f"{family}_latest", family):
        for entry in external_ids:
            if entry.provider == provider:
                return entry.external_id
    return None


class JustWatchClient(CatalogClient):
    """Legacy catalog client. 400 and 404 both mean "no such title"."""

    not_found_statuses = frozenset({400, 404})

    @property
    def name(self) -> str:
        return "JustWatch"

    @property
    def base_url(self) -> str:
        return self._settings.justwatch_api_base

    async def get_detailed_meta(
        self, media_type: MediaType, jw_id: str
    ) -> Optional[JWDetailedMeta]:
        url = f"/content/titles/{media_type_to_tag(media_type)}/{jw_id}/locale/{LOCALE}"
        try:
            data = await self._get(url)
        except NotFoundError:
            logger.info("JustWatch has no %s with ID %s", media_type.value, jw_id)
            return None
        return JWDetailedMeta.model_validate(data)

    async def get_season(self, season_id: str) -> JWSeasonMetaResult:
        data = await self._get(f"/content/titles/show_season/{season_id}/locale/{LOCALE}")
        return JWSeasonMetaResult.model_validate(data)
