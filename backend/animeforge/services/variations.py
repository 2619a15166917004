# animeforge/services/variations.py

"""
Director's Choice: four art-direction variations for one manga panel.

Two layers, mirroring how the studio talks to the hosted function:

* ``VariationService.request_variations`` is the generation endpoint. It
  calls the LLM gateway once and raises RateLimitedError / PaymentRequiredError
  / VariationError on gateway failures. A malformed response body is
  replaced by the fixed fallback list.
* ``VariationService.generate_for_panel`` is what the studio calls. It never
  fails: any VariationError is reported as a notice and the fallback list is
  shown instead, so the user always gets exactly four options.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import requests
from pydantic import ValidationError

from animeforge import models
from animeforge.core.config import settings
from animeforge.core.errors import (
    PaymentRequiredError,
    RateLimitedError,
    VariationError,
)
from animeforge.schemas.variation import Variation

logger = logging.getLogger(__name__)

VARIATION_COUNT = 4
DEFAULT_STYLE_PREFERENCES = ["anime", "manga"]

_FALLBACK_STYLES = [
    (
        "Dynamic action pose with speed lines",
        "Dynamic action pose with motion blur and speed lines, anime style",
        "High energy, Trigger-style animation",
    ),
    (
        "Dramatic lighting with shadows",
        "Dramatic cinematic lighting with deep shadows, anime style",
        "Mappa-style realism, strong contrast",
    ),
    (
        "Soft, dreamy atmosphere",
        "Soft watercolor aesthetic with warm lighting, anime style",
        "Ghibli-inspired, pastoral mood",
    ),
    (
        "Abstract symbolic composition",
        "Unique angles with symbolic imagery, anime style",
        "Shaft-style avant-garde",
    ),
]


def fallback_variations(panel_description: str) -> List[Variation]:
    return [
        Variation(
            id=str(i),
            description=description,
            prompt=f"{panel_description} - {suffix}",
            style_notes=style_notes,
        )
        for i, (description, suffix, style_notes) in enumerate(_FALLBACK_STYLES, start=1)
    ]


def build_character_context(characters: Iterable[models.CharacterSeed]) -> str:
    return "\n".join(
        f"{c.name} ({c.role}): {c.appearance or 'No description'}"
        for c in characters
    )


@dataclass
class VariationResult:
    variations: List[Variation]
    # rate_limited / payment_required / generation_failed
    notice: Optional[str] = None
    message: Optional[str] = None


class VariationService:
    """Client for the LLM gateway behind Director's Choice."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.AI_GATEWAY_API_KEY
        self.url = url or settings.AI_GATEWAY_URL
        self.model = model or settings.AI_GATEWAY_MODEL
        self.timeout = timeout or settings.AI_GATEWAY_TIMEOUT_SECONDS

    def request_variations(
        self,
        panel_description: str,
        dialogue: Optional[str] = None,
        character_context: Optional[str] = None,
        style_preferences: Optional[List[str]] = None,
    ) -> List[Variation]:
        if not self.api_key:
            raise VariationError("AI gateway API key is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self._system_prompt()},
                {
                    "role": "user",
                    "content": self._user_prompt(
                        panel_description, dialogue, character_context, style_preferences
                    ),
                },
            ],
            "response_format": {"type": "json_object"},
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = requests.post(self.url, headers=headers, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("AI gateway unreachable: %s", e)
            raise VariationError(f"AI gateway unreachable: {e}")

        if resp.status_code == 429:
            raise RateLimitedError()
        if resp.status_code == 402:
            raise PaymentRequiredError()
        if not resp.ok:
            logger.error("AI gateway error: %s %s", resp.status_code, resp.text[:500])
            raise VariationError(f"AI gateway error: {resp.status_code}")

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            content = None

        variations = self._parse_variations(content) if content else None
        if variations is None:
            logger.warning("Unparsable variations from model, using fallback list")
            return fallback_variations(panel_description)
        return variations

    def generate_for_panel(
        self,
        panel: models.MangaPanel,
        characters: Iterable[models.CharacterSeed],
        style_preferences: Optional[List[str]] = None,
    ) -> VariationResult:
        description = panel.description or "Anime scene"
        try:
            variations = self.request_variations(
                panel_description=description,
                dialogue=panel.dialogue,
                character_context=build_character_context(characters),
                style_preferences=style_preferences or DEFAULT_STYLE_PREFERENCES,
            )
            return VariationResult(variations=variations)
        except RateLimitedError as e:
            notice, message = "rate_limited", e.message
        except PaymentRequiredError as e:
            notice, message = "payment_required", e.message
        except VariationError as e:
            notice, message = "generation_failed", e.message

        logger.warning("Variations for panel %s fell back (%s): %s", panel.id, notice, message)
        return VariationResult(
            variations=fallback_variations(description),
            notice=notice,
            message=message,
        )

    def _parse_variations(self, content: str) -> Optional[List[Variation]]:
        """Exactly four well-formed records, or None."""
        try:
            parsed = json.loads(content)
        except (TypeError, ValueError):
            return None

        if isinstance(parsed, dict):
            parsed = parsed.get("variations", parsed)
        if not isinstance(parsed, list) or len(parsed) < VARIATION_COUNT:
            return None

        variations = []
        for i, item in enumerate(parsed[:VARIATION_COUNT], start=1):
            if not isinstance(item, dict):
                return None
            item = dict(item)
            item["id"] = str(item.get("id") or i)
            try:
                variations.append(Variation.model_validate(item))
            except ValidationError:
                return None
        return variations

    def _user_prompt(
        self,
        panel_description: str,
        dialogue: Optional[str],
        character_context: Optional[str],
        style_preferences: Optional[List[str]],
    ) -> str:
        lines = [f"Panel Description: {panel_description}"]
        if dialogue:
            lines.append(f'Dialogue: "{dialogue}"')
        if character_context:
            lines.append(f"Characters:\n{character_context}")
        lines.append(f"Style Preferences: {', '.join(style_preferences or DEFAULT_STYLE_PREFERENCES)}")
        lines.append("")
        lines.append("Generate 4 distinct visual variations for this panel.")
        return "\n".join(lines)

    def _system_prompt(self) -> str:
        return """
You are an expert anime/manga art director. Your task is to generate 4 distinct
visual variations for a manga panel.

Each variation should offer a different artistic interpretation while staying
true to the scene's content.

Consider:
- Different camera angles (close-up, wide shot, bird's eye, dutch angle)
- Different lighting moods (dramatic shadows, soft diffuse, high contrast, backlit)
- Different composition styles (rule of thirds, centered, asymmetric, dynamic)
- Different artistic influences (Ghibli soft, Trigger dynamic, Mappa cinematic, Shaft abstract)

Respond with a JSON object containing an array "variations" of 4 variations, each with:
- id: unique identifier
- description: brief visual description (max 20 words)
- prompt: detailed art prompt for image generation
- style_notes: artistic style reference
""".strip()
