# ============================================================================
# src/medication_scan/vocabulary/rxnav.py
# ============================================================================
"""
RxNav Drug Vocabulary Client

Looks up free-text drug names in the NLM RxNav REST API:
- /drugs.json?name=...            -> concepts for a name (brand or generic)
- /rxcui/{rxcui}/properties.json  -> properties of one concept

An empty result means "no such drug", not an error. Transport problems raise
VocabularyLookupError so callers can tell the two apart.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ..config.vocabulary_config import VocabularySettings, vocabulary_settings
from ..core.models import DrugRecord
from ..utils.exceptions import VocabularyLookupError


def _record_from_properties(properties: Dict[str, Any]) -> DrugRecord:
    return DrugRecord(
        rxcui=properties.get("rxcui"),
        name=properties.get("name"),
        synonym=properties.get("synonym"),
        tty=properties.get("tty"),
        language=properties.get("language"),
    )


def parse_search_response(payload: Dict[str, Any]) -> List[DrugRecord]:
    """Flatten drugGroup.conceptGroup[].conceptProperties[] into records."""
    concept_groups = (payload.get("drugGroup") or {}).get("conceptGroup") or []
    return [
        _record_from_properties(properties)
        for group in concept_groups
        for properties in group.get("conceptProperties") or []
    ]


def parse_properties_response(payload: Dict[str, Any]) -> Optional[DrugRecord]:
    properties = payload.get("properties")
    if not properties:
        return None
    return _record_from_properties(properties)


class RxNavClient:
    """
    Async RxNav client.

    Concurrent lookups share one aiohttp session and are capped by a
    per-instance semaphore (RXNAV_MAX_CONCURRENT).
    """

    def __init__(
        self,
        settings: Optional[VocabularySettings] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.settings = settings or vocabulary_settings
        self.base_url = self.settings.RXNAV_BASE_URL.rstrip("/")
        self._session = session
        self._owns_session = session is None
        self._semaphore = asyncio.Semaphore(self.settings.RXNAV_MAX_CONCURRENT)
        self.logger = logging.getLogger(__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.settings.RXNAV_TIMEOUT)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _get_json(self, path: str, name: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        session = await self._get_session()
        url = f"{self.base_url}{path}"
        try:
            async with self._semaphore:
                async with session.get(url, params=params) as response:
                    if response.status != 200:
                        raise VocabularyLookupError(
                            f"RxNav returned status {response.status} for '{name}'",
                            name=name
                        )
                    return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise VocabularyLookupError(f"RxNav request for '{name}' failed: {e}", name=name) from e

    async def search(self, name: str) -> List[DrugRecord]:
        """
        Find drug concepts matching a name.

        Args:
            name: Free-text drug name

        Returns:
            Matching records; empty when RxNav knows no such drug

        Raises:
            VocabularyLookupError: RxNav unreachable or returned an error
        """
        self.logger.debug(f"Searching RxNav for: {name}")
        payload = await self._get_json("/drugs.json", name, params={"name": name})
        return parse_search_response(payload)

    async def get_drug_info(self, rxcui: str) -> Optional[DrugRecord]:
        """
        Fetch properties for one RxCUI.

        Returns:
            The record, or None when RxNav has no properties for it
        """
        self.logger.debug(f"Fetching drug info for RxCUI: {rxcui}")
        payload = await self._get_json(f"/rxcui/{rxcui}/properties.json", rxcui)
        return parse_properties_response(payload)
