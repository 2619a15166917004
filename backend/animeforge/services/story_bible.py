import copy
import logging

from animeforge import models
from animeforge.schemas.story_bible import StoryBible
from animeforge.services.editor import ProjectEditor

logger = logging.getLogger(__name__)

SUGGESTED_ELEMENTS = {
    "logline": "A young warrior discovers an ancient power that could save or destroy their world.",
    "themes": ["Destiny", "Sacrifice", "Redemption"],
    "worldRules": [
        "Magic flows from ancient crystals",
        "The gods watch but rarely intervene",
        "Technology and magic coexist uneasily",
    ],
    "acts": [
        {
            "name": "Act 1: The Awakening",
            "description": "The protagonist discovers their hidden powers",
        },
        {
            "name": "Act 2: The Journey",
            "description": "Training and gathering allies for the coming storm",
        },
        {
            "name": "Act 3: The Confrontation",
            "description": "The final battle against the forces of darkness",
        },
    ],
}


def suggest_elements(story_bible: StoryBible) -> StoryBible:
    """Fill in logline/themes/worldRules/acts where the document has none. Nothing is saved."""
    document = story_bible.to_document()
    for key, value in SUGGESTED_ELEMENTS.items():
        if not document.get(key):
            document[key] = copy.deepcopy(value)
    return StoryBible.model_validate(document)


class StoryBibleEditor(ProjectEditor):
    """The story document stored on the project row."""

    def load(self) -> StoryBible:
        return StoryBible.model_validate(self.project.story_bible or {})

    def save(self, story_bible: StoryBible) -> models.Project:
        document = story_bible.to_document()

        self.project.name = story_bible.title or self.project.name
        self.project.genre = story_bible.genre
        self.project.story_bible = document
        self.db.add(self.project)
        self._commit("Failed to save story bible")
        self.db.refresh(self.project)

        self.cache.put(self.project)
        logger.info("Story bible saved for project %s", self.project_id)
        return self.project
