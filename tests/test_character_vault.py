from types import SimpleNamespace
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from animeforge import models
from animeforge.core.errors import NotFoundError, PermissionDeniedError, PersistenceError
from animeforge.services.character_vault import CharacterVault, GENERATED_STYLE_DNA, next_selection


@pytest.fixture
def vault(db, auth, project):
    with CharacterVault(db, auth, project.id) as vault:
        yield vault


def test_next_selection_picks_first_remaining():
    roster = [SimpleNamespace(id=i) for i in (1, 2, 3)]
    assert next_selection(roster, 2).id == 1
    assert next_selection(roster, 1).id == 2
    assert next_selection([SimpleNamespace(id=5)], 5) is None


def test_empty_vault_has_no_selection(vault):
    assert vault.characters == []
    assert vault.selected is None


def test_create_uses_defaults_and_selects(vault):
    character = vault.create()

    assert character.name == "New Character"
    assert character.role == "supporting"
    assert character.personality == ["Mysterious"]
    assert character.style_dna == {}
    assert character.created_by == "user-1"
    assert vault.selected is character
    assert vault.characters == [character]


def test_load_orders_by_creation_and_selects_first(db, auth, project, vault):
    first = vault.create(name="Akira")
    vault.create(name="Mei")

    with CharacterVault(db, auth, project.id) as fresh:
        names = [c.name for c in fresh.load()]
        assert names == ["Akira", "Mei"]
        assert fresh.selected.id == first.id


def test_click_selects(vault):
    akira = vault.create(name="Akira")
    vault.create(name="Mei")
    assert vault.select(akira.id) is akira
    assert vault.selected is akira


def test_delete_selected_moves_to_first_remaining(vault):
    akira = vault.create(name="Akira")
    mei = vault.create(name="Mei")
    ren = vault.create(name="Ren")

    vault.select(mei.id)
    assert vault.delete() is akira
    assert [c.name for c in vault.characters] == ["Akira", "Ren"]

    vault.select(akira.id)
    assert vault.delete().id == ren.id
    assert vault.delete() is None
    assert vault.characters == []


def test_delete_unselected_keeps_selection(vault):
    akira = vault.create(name="Akira")
    mei = vault.create(name="Mei")

    assert vault.selected is mei
    assert vault.delete(akira.id) is mei


def test_delete_without_selection(vault):
    with pytest.raises(NotFoundError):
        vault.delete()


def test_update_only_touches_editable_fields(vault):
    character = vault.create(name="Akira")
    updated = vault.update({"appearance": "Silver hair", "project_id": 999, "abilities": ["Wind step"]})

    assert updated.appearance == "Silver hair"
    assert updated.abilities == ["Wind step"]
    assert updated.project_id == character.project_id


def test_generate_style_dna(vault):
    vault.create(name="Akira")
    assert vault.generate_style_dna().style_dna == GENERATED_STYLE_DNA


def test_failed_save_keeps_cache(db, vault):
    character = vault.create(name="Akira")

    with patch.object(db, "commit", side_effect=SQLAlchemyError("disk full")):
        with pytest.raises(PersistenceError) as excinfo:
            vault.update({"name": "Renamed"})

    assert excinfo.value.message == "Failed to update character"
    assert vault.cache.get(character.id).name == "Akira"


def test_characters_of_other_projects_are_not_found(db, auth, project, vault):
    other = models.Project(name="Other", created_by=auth.user_id)
    db.add(other)
    db.commit()
    stranger = CharacterVault(db, auth, other.id).create(name="Stranger")

    with pytest.raises(NotFoundError):
        vault.select(stranger.id)


def test_non_owner_cannot_open_vault(db, project, other_auth):
    with pytest.raises(PermissionDeniedError):
        CharacterVault(db, other_auth, project.id)


def test_admin_can_open_any_vault(db, project, other_auth):
    db.add(models.UserRole(user_id=other_auth.user_id, role=models.AppRole.admin))
    db.commit()
    with CharacterVault(db, other_auth, project.id) as vault:
        assert vault.characters == []


def test_sign_out_drops_cached_rows(auth, vault):
    vault.create(name="Akira")
    assert len(vault.cache) == 1

    auth.sign_out()
    assert len(vault.cache) == 0
    assert not vault.cache.loaded
