import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import not_, update

from animeforge import models
from animeforge.core.errors import NotFoundError
from animeforge.models.provenance import record_change
from animeforge.schemas.variation import Variation
from animeforge.services.editor import ProjectEditor
from animeforge.services.variations import VariationResult, VariationService

logger = logging.getLogger(__name__)

NEW_PANEL_DESCRIPTION = "New panel - click to edit"

EDITABLE_FIELDS = (
    "chapter_number", "page_number", "panel_position", "description", "dialogue", "prompt_data",
)


class DirectorStudio(ProjectEditor):
    """Manga panels of one project, laid out by (chapter, page, position)."""

    def __init__(self, db, auth, project_id: int, variation_service: Optional[VariationService] = None):
        super().__init__(db, auth, project_id)
        self.variation_service = variation_service or VariationService()

    @property
    def panels(self) -> List[models.MangaPanel]:
        if not self.cache.loaded:
            self.load()
        return self.cache.values()

    def load(self) -> List[models.MangaPanel]:
        rows = (
            self.db.query(models.MangaPanel)
            .filter(models.MangaPanel.project_id == self.project_id)
            .order_by(
                models.MangaPanel.chapter_number.asc(),
                models.MangaPanel.page_number.asc(),
                models.MangaPanel.panel_position.asc(),
                models.MangaPanel.id.asc(),
            )
            .all()
        )
        self.cache.load(rows)
        return rows

    def page_panels(self, chapter: int, page: int) -> List[models.MangaPanel]:
        panels = [p for p in self.panels if p.chapter_number == chapter and p.page_number == page]
        return sorted(panels, key=lambda p: (p.panel_position, p.id))

    def max_page(self) -> int:
        return max([p.page_number for p in self.panels] + [1])

    def keyframes(self) -> List[models.MangaPanel]:
        return [p for p in self.panels if p.is_keyframe]

    def add_panel(self, chapter: int = 1, page: int = 1) -> models.MangaPanel:
        panel = models.MangaPanel(
            project_id=self.project_id,
            chapter_number=chapter,
            page_number=page,
            panel_position=len(self.page_panels(chapter, page)),
            description=NEW_PANEL_DESCRIPTION,
            prompt_data={},
            created_by=self.auth.user_id,
        )
        self.db.add(panel)
        self._commit("Failed to add panel")
        self.db.refresh(panel)
        self.cache.put(panel)
        return panel

    def update_panel(self, panel_id: int, updates: Dict[str, Any]) -> models.MangaPanel:
        panel = self.get_panel(panel_id)
        for field, value in updates.items():
            if field in EDITABLE_FIELDS:
                setattr(panel, field, value)
        self.db.add(panel)
        self._commit("Failed to update panel")
        self.db.refresh(panel)
        self.cache.put(panel)
        return panel

    def delete_panel(self, panel_id: int) -> None:
        panel = self.get_panel(panel_id)
        self.db.delete(panel)
        self._commit("Failed to delete panel")
        self.cache.invalidate(panel_id)

    def toggle_keyframe(self, panel_id: int) -> models.MangaPanel:
        """Flip ``is_keyframe`` in one statement so concurrent toggles do not lose updates."""
        panel = self.get_panel(panel_id)
        self.db.execute(
            update(models.MangaPanel)
            .where(models.MangaPanel.id == panel.id)
            .values(is_keyframe=not_(models.MangaPanel.is_keyframe), updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        self.db.refresh(panel)
        record_change(
            self.db,
            panel,
            {"is_keyframe": {"old": not panel.is_keyframe, "new": panel.is_keyframe}},
        )
        self._commit("Failed to update keyframe")
        self.db.refresh(panel)
        self.cache.put(panel)
        return panel

    def generate_variations(self, panel_id: int, style_preferences: Optional[List[str]] = None) -> VariationResult:
        panel = self.get_panel(panel_id)
        characters = (
            self.db.query(models.CharacterSeed)
            .filter(models.CharacterSeed.project_id == self.project_id)
            .order_by(models.CharacterSeed.created_at, models.CharacterSeed.id)
            .all()
        )
        return self.variation_service.generate_for_panel(panel, characters, style_preferences)

    def select_variation(
        self,
        panel_id: int,
        variations: Sequence[Variation],
        selected_index: int,
    ) -> models.MangaPanel:
        """
        Keep the chosen variation: write its preview into the panel's
        ``image_url`` and record the choice. The other variations are only
        kept inside the choice record.
        """
        if not 0 <= selected_index < len(variations):
            raise NotFoundError("Selected variation does not exist")

        panel = self.get_panel(panel_id)
        chosen = variations[selected_index]
        panel.image_url = chosen.preview_url or ""

        self.db.add(panel)
        self.db.add(
            models.DirectorChoice(
                project_id=self.project_id,
                panel_id=panel.id,
                choice_type="panel_variation",
                variations=[v.model_dump() for v in variations],
                selected_index=selected_index,
                selected_by=self.auth.user_id,
                selected_at=datetime.utcnow(),
            )
        )
        self._commit("Failed to save choice")
        self.db.refresh(panel)
        self.cache.put(panel)
        logger.info("Director's choice %s saved for panel %s", selected_index, panel.id)
        return panel

    def get_panel(self, panel_id: int) -> models.MangaPanel:
        panel = self.cache.get(panel_id)
        if panel is None:
            panel = (
                self.db.query(models.MangaPanel)
                .filter(
                    models.MangaPanel.id == panel_id,
                    models.MangaPanel.project_id == self.project_id,
                )
                .first()
            )
        if panel is None:
            raise NotFoundError("Panel not found")
        return panel
