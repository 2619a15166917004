import pytest

from animeforge.core.errors import PermissionDeniedError
from animeforge.schemas import StoryBible
from animeforge.services.story_bible import SUGGESTED_ELEMENTS, StoryBibleEditor, suggest_elements


def test_suggest_fills_only_missing_fields():
    bible = StoryBible(title="Crystal Blade", logline="A blade that remembers.", themes=[])
    suggested = suggest_elements(bible).to_document()

    assert suggested["title"] == "Crystal Blade"
    assert suggested["logline"] == "A blade that remembers."
    assert suggested["themes"] == SUGGESTED_ELEMENTS["themes"]
    assert suggested["worldRules"] == SUGGESTED_ELEMENTS["worldRules"]
    assert [a["name"] for a in suggested["acts"]] == [
        "Act 1: The Awakening",
        "Act 2: The Journey",
        "Act 3: The Confrontation",
    ]


def test_suggest_does_not_share_defaults():
    first = suggest_elements(StoryBible())
    first.themes.append("Friendship")
    assert "Friendship" not in suggest_elements(StoryBible()).themes


def test_document_keeps_client_keys():
    bible = StoryBible.model_validate({"plotSummary": "Twins swap fates.", "moodBoard": ["rain", "neon"]})
    assert bible.plot_summary == "Twins swap fates."
    assert bible.to_document() == {"plotSummary": "Twins swap fates.", "moodBoard": ["rain", "neon"]}


def test_save_writes_document_name_and_genre(db, auth, project):
    bible = StoryBible(title="Shattered Stars", genre="Sci-fi", worldRules=["No FTL"])
    with StoryBibleEditor(db, auth, project.id) as editor:
        saved = editor.save(bible)
        assert editor.load().world_rules == ["No FTL"]

    assert saved.name == "Shattered Stars"
    assert saved.genre == "Sci-fi"
    assert saved.story_bible == {"title": "Shattered Stars", "genre": "Sci-fi", "worldRules": ["No FTL"]}


def test_save_without_title_keeps_name(db, auth, project):
    with StoryBibleEditor(db, auth, project.id) as editor:
        saved = editor.save(StoryBible(logline="Short and sharp."))
    assert saved.name == "Crystal Blade"
    assert saved.genre is None


def test_empty_project_loads_empty_bible(db, auth, project):
    with StoryBibleEditor(db, auth, project.id) as editor:
        assert editor.load().to_document() == {}


def test_other_users_cannot_edit(db, project, other_auth):
    with pytest.raises(PermissionDeniedError):
        StoryBibleEditor(db, other_auth, project.id)
