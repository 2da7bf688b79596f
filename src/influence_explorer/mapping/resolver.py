"""Entity name -> canonical hex id resolution.

The contextualize service returns entities it recognizes in free text.
Resolution never raises: when the service is unreachable or returns nothing
usable, the input is returned unchanged (callers may already be passing a
canonical id). The id validator downstream decides whether the result is
acceptable.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Final
from urllib.parse import urlencode

from .transport import Fetch, http_get

if TYPE_CHECKING:
    from .request import RequestContext

logger = logging.getLogger(__name__)

CONTEXTUALIZE_URL: Final[str] = "https://inbox.influenceexplorer.com/contextualize"


def contextualize_url(text: str, api_key: str) -> str:
    return f"{CONTEXTUALIZE_URL}?{urlencode({'apikey': api_key, 'text': text})}"


def resolve_entity_id(
    text: str,
    api_key: str,
    *,
    fetch: Fetch | None = None,
) -> str:
    """Return `entities[0].entity_data.id` for `text`, or `text` on any failure."""
    fetch = fetch or http_get
    try:
        payload = json.loads(fetch(contextualize_url(text, api_key)))
        entity_id = payload["entities"][0]["entity_data"]["id"]
    except Exception as e:
        logger.debug(
            "Entity resolution fell back to input text=%r err=%s",
            text,
            type(e).__name__,
        )
        return text

    if not isinstance(entity_id, str) or not entity_id:
        logger.debug("Entity resolution returned unusable id=%r text=%r", entity_id, text)
        return text

    logger.debug("Resolved entity text=%r id=%s", text, entity_id)
    return entity_id


def entity_setter(value: str, context: RequestContext) -> str:
    """Param setter resolving names through the contextualize service."""
    return resolve_entity_id(value, context.api_key, fetch=context.fetch)
