"""Claude-backed sommelier advisor: descriptions, food pairings and stock advice.

Every public call degrades to a fixed fallback value. Failures are logged
and never reach the ledger or the routers.
"""

import asyncio
import json
import logging
import os
from collections.abc import Iterable
from typing import Any

from vinora.config import settings
from vinora.models import Wine, WineDraft

logger = logging.getLogger(__name__)

DESCRIPTION_FALLBACK = "Description non disponible."
ANALYSIS_FALLBACK = "Impossible d'analyser le stock actuellement."
PAIRINGS_FALLBACK = ("Fromages affinés", "Viandes grillées", "Plats régionaux")

DESCRIPTION_PROMPT = """Générer une description professionnelle de sommelier pour ce vin :
Nom: {name}, Millésime: {vintage}, Type: {wine_type}, Région: {region}.
La description doit être en français, élégante et faire environ 3 phrases.
Réponds uniquement avec la description."""

PAIRINGS_PROMPT = """Suggérer 3 accords mets et vins parfaits pour ce vin : {name} ({vintage}, {wine_type}, {region}).
Return ONLY a valid JSON array of 3 strings, for example:
["Magret de canard", "Comté 24 mois", "Risotto aux cèpes"]"""

ANALYSIS_PROMPT = """Agis en tant que gestionnaire de cave. Voici mon stock actuel : {summary}.
Donne-moi un court conseil stratégique (2 phrases) sur le réapprovisionnement ou les ventes prioritaires."""


class AdvisorUnavailableError(Exception):
    """Raised inside the advisor when generation fails or returns unusable output."""

    pass


def _strip_code_fence(text: str) -> str:
    """Remove a markdown code block wrapper if Claude added one."""
    if "```json" in text:
        return text.split("```json")[1].split("```")[0]
    if "```" in text:
        return text.split("```")[1].split("```")[0]
    return text


def _type_label(wine: WineDraft) -> str:
    return wine.wine_type.value if wine.wine_type else ""


class ClaudeAdvisorService:
    """Service for generating wine text with Claude."""

    def __init__(self, client: Any = None) -> None:
        """Initialize the advisor.

        Args:
            client: Optional pre-built Anthropic client (used by tests).
        """
        self._default_client = client

    def _get_system_api_key(self) -> str | None:
        """Get the system-wide API key from settings or environment."""
        return settings.anthropic_api_key or os.getenv("ANTHROPIC_API_KEY")

    def _get_client(self):
        """Get the cached Anthropic client, creating it on first use."""
        if self._default_client is not None:
            return self._default_client

        import anthropic

        api_key = self._get_system_api_key()
        if not api_key:
            raise AdvisorUnavailableError("No Anthropic API key configured")

        self._default_client = anthropic.Anthropic(api_key=api_key)
        return self._default_client

    def is_available(self) -> bool:
        """Check if the advisor is enabled and has credentials."""
        if not settings.advisor_enabled:
            return False
        return self._default_client is not None or bool(self._get_system_api_key())

    async def _complete(self, prompt: str) -> str:
        """Send one prompt and return the reply text.

        Raises:
            AdvisorUnavailableError: On any client failure or empty reply.
        """
        if not self.is_available():
            raise AdvisorUnavailableError("Advisor disabled or not configured")

        try:
            client = self._get_client()
            message = await asyncio.to_thread(
                client.messages.create,
                model=settings.advisor_model,
                max_tokens=settings.advisor_max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
            text = message.content[0].text
        except AdvisorUnavailableError:
            raise
        except Exception as e:
            raise AdvisorUnavailableError(f"Claude request failed: {e}") from e

        if not text or not text.strip():
            raise AdvisorUnavailableError("Claude returned an empty response")
        return text.strip()

    async def generate_description(self, draft: WineDraft) -> str:
        """Write a short sommelier description for a wine draft."""
        prompt = DESCRIPTION_PROMPT.format(
            name=draft.name,
            vintage=draft.vintage or "",
            wine_type=_type_label(draft),
            region=draft.region,
        )
        try:
            return await self._complete(prompt)
        except AdvisorUnavailableError as e:
            logger.error(f"Description generation failed: {e}")
            return DESCRIPTION_FALLBACK

    async def suggest_pairings(self, wine: WineDraft) -> list[str]:
        """Suggest food pairings, usually three."""
        prompt = PAIRINGS_PROMPT.format(
            name=wine.name,
            vintage=wine.vintage or "",
            wine_type=_type_label(wine),
            region=wine.region,
        )
        response_text = ""
        try:
            response_text = await self._complete(prompt)
            result = json.loads(_strip_code_fence(response_text).strip())
            if not isinstance(result, list) or not result:
                raise AdvisorUnavailableError("Pairings response is not a non-empty list")
            return [str(item) for item in result]
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse Claude pairings as JSON: {e}")
            logger.debug(f"Response was: {response_text}")
        except AdvisorUnavailableError as e:
            logger.error(f"Pairing suggestion failed: {e}")
        return list(PAIRINGS_FALLBACK)

    async def analyze_stock(self, wines: Iterable[Wine]) -> str:
        """Give brief restock or sales advice for the whole inventory."""
        summary = ", ".join(f"{w.name}: {w.stock} bouteilles" for w in wines)
        try:
            return await self._complete(ANALYSIS_PROMPT.format(summary=summary))
        except AdvisorUnavailableError as e:
            logger.error(f"Stock analysis failed: {e}")
            return ANALYSIS_FALLBACK


class PairingBoard:
    """Per-wine pairing requests with memoised results.

    The first trigger for a wine starts one request; triggers that arrive
    while it is pending share it. Once a result exists, a trigger only flips
    whether the pairings are shown.
    """

    def __init__(self, advisor: ClaudeAdvisorService) -> None:
        self._advisor = advisor
        self._pending: dict[str, asyncio.Task] = {}
        self._results: dict[str, list[str]] = {}
        self._visible: dict[str, bool] = {}

    def cached(self, wine_id: str) -> list[str] | None:
        return self._results.get(wine_id)

    def is_pending(self, wine_id: str) -> bool:
        return wine_id in self._pending

    async def toggle(self, wine: Wine) -> tuple[list[str], bool]:
        """Fetch or toggle the pairings for ``wine``.

        A caller that is cancelled while waiting leaves the shared request
        running for the others.

        Returns:
            The pairings and whether they are currently shown.
        """
        if wine.id in self._results:
            self._visible[wine.id] = not self._visible.get(wine.id, False)
            return list(self._results[wine.id]), self._visible[wine.id]

        task = self._pending.get(wine.id)
        if task is None:
            task = asyncio.create_task(self._fetch(wine))
            self._pending[wine.id] = task

        pairings = await asyncio.shield(task)
        return list(pairings), True

    async def _fetch(self, wine: Wine) -> list[str]:
        try:
            pairings = await self._advisor.suggest_pairings(wine)
        finally:
            self._pending.pop(wine.id, None)
        self._results[wine.id] = pairings
        self._visible[wine.id] = True
        return pairings

    def forget(self, wine_id: str) -> None:
        """Drop anything remembered for a deleted wine."""
        self._results.pop(wine_id, None)
        self._visible.pop(wine_id, None)
