import logging
from typing import Any, Dict, List, Optional, Sequence

from animeforge import models
from animeforge.core.errors import NotFoundError
from animeforge.services.editor import ProjectEditor

logger = logging.getLogger(__name__)

NEW_CHARACTER_DEFAULTS = {
    "name": "New Character",
    "role": "supporting",
    "personality": ["Mysterious"],
    "style_dna": {},
}

GENERATED_STYLE_DNA = {
    "face_shape": "angular",
    "eye_style": "sharp",
    "hair_color": "#2a1f5c",
    "hair_style": "spiky",
    "color_palette": ["#ff4081", "#00bcd4", "#1a1a2e"],
    "line_weight": "medium",
    "shading_style": "cel",
}

EDITABLE_FIELDS = (
    "name", "role", "personality", "abilities", "style_dna", "appearance", "backstory",
)


def next_selection(characters: Sequence[models.CharacterSeed], deleted_id: int) -> Optional[models.CharacterSeed]:
    """After deleting ``deleted_id``: the first remaining character in list order, or None."""
    remaining = [c for c in characters if c.id != deleted_id]
    return remaining[0] if remaining else None


class CharacterVault(ProjectEditor):
    """
    Character roster of one project.

    Selection is ``None`` or one character:
    create selects the new character, delete selects the next remaining one
    (or None), select picks the clicked one.
    """

    def __init__(self, db, auth, project_id: int):
        super().__init__(db, auth, project_id)
        self.selected: Optional[models.CharacterSeed] = None

    @property
    def characters(self) -> List[models.CharacterSeed]:
        if not self.cache.loaded:
            self.load()
        return self.cache.values()

    def load(self) -> List[models.CharacterSeed]:
        rows = (
            self.db.query(models.CharacterSeed)
            .filter(models.CharacterSeed.project_id == self.project_id)
            .order_by(models.CharacterSeed.created_at, models.CharacterSeed.id)
            .all()
        )
        self.cache.load(rows)
        if self.selected is None or self.selected.id not in self.cache:
            self.selected = rows[0] if rows else None
        return rows

    def select(self, character_id: int) -> models.CharacterSeed:
        character = self._get(character_id)
        self.selected = character
        return character

    def create(self, **fields) -> models.CharacterSeed:
        values = dict(NEW_CHARACTER_DEFAULTS)
        values.update({k: v for k, v in fields.items() if k in EDITABLE_FIELDS})

        character = models.CharacterSeed(
            project_id=self.project_id,
            created_by=self.auth.user_id,
            **values,
        )
        self.db.add(character)
        self._commit("Failed to create character")
        self.db.refresh(character)

        self.characters  # make sure the roster is loaded before appending
        self.cache.put(character)
        self.selected = character
        logger.info("Created character %s in project %s", character.id, self.project_id)
        return character

    def update(self, updates: Dict[str, Any], character_id: Optional[int] = None) -> models.CharacterSeed:
        character = self._target(character_id)
        for field, value in updates.items():
            if field in EDITABLE_FIELDS:
                setattr(character, field, value)
        self.db.add(character)
        self._commit("Failed to update character")
        self.db.refresh(character)

        self.cache.put(character)
        self.selected = character
        return character

    def delete(self, character_id: Optional[int] = None) -> Optional[models.CharacterSeed]:
        """Delete a character (default: the selected one) and return the new selection."""
        character = self._target(character_id)
        deleted_id = character.id
        was_selected = self.selected is None or self.selected.id == deleted_id
        successor = next_selection(self.characters, deleted_id)

        self.db.delete(character)
        self._commit("Failed to delete character")

        self.cache.invalidate(deleted_id)
        if was_selected:
            self.selected = successor
        logger.info("Deleted character %s from project %s", deleted_id, self.project_id)
        return self.selected

    def generate_style_dna(self, character_id: Optional[int] = None) -> models.CharacterSeed:
        return self.update({"style_dna": dict(GENERATED_STYLE_DNA)}, character_id)

    def set_reference_image(self, character_id: int, url: str) -> models.CharacterSeed:
        character = self._target(character_id)
        character.reference_image_url = url
        self.db.add(character)
        self._commit("Failed to save reference image")
        self.db.refresh(character)
        self.cache.put(character)
        return character

    def _target(self, character_id: Optional[int]) -> models.CharacterSeed:
        if character_id is None:
            if self.selected is None:
                raise NotFoundError("No character selected")
            return self.selected
        return self._get(character_id)

    def _get(self, character_id: int) -> models.CharacterSeed:
        character = self.cache.get(character_id)
        if character is None:
            character = (
                self.db.query(models.CharacterSeed)
                .filter(
                    models.CharacterSeed.id == character_id,
                    models.CharacterSeed.project_id == self.project_id,
                )
                .first()
            )
        if character is None:
            raise NotFoundError("Character not found")
        return character
