import random
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from animeforge.schemas import DraftMessage
from animeforge.services.story_drafter import (
    QUICK_PROMPTS,
    StoryDrafter,
    canned_replies,
    genre_hint,
)


def openai_stub(content="**Genre:** Mecha / Drama"):
    client = MagicMock()
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )
    return client


@pytest.mark.parametrize(
    "user_input,hint",
    [
        ("A romance between rivals in a magical academy", "Romance / Fantasy"),
        ("A story about a young hero discovering hidden powers", "Shonen / Action"),
        ("A mystery thriller in a cyberpunk city", "Fantasy / Adventure"),
    ],
)
def test_genre_hint(user_input, hint):
    assert genre_hint(user_input) == hint


def test_four_quick_prompts():
    assert len(QUICK_PROMPTS) == 4
    assert QUICK_PROMPTS[3] == "An isekai adventure in a fantasy world"


def test_welcome_is_from_assistant():
    welcome = StoryDrafter(client=None).welcome()
    assert welcome.role == "assistant"
    assert "Welcome to AnimeForge" in welcome.content


def test_reply_uses_model_with_history():
    client = openai_stub()
    drafter = StoryDrafter(client=client, model="test-model")
    history = [
        DraftMessage(role="assistant", content="What kind of anime?"),
        DraftMessage(role="user", content="Giant robots and grief"),
    ]

    reply = drafter.reply(history)

    assert reply == DraftMessage(role="assistant", content="**Genre:** Mecha / Drama")
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["messages"][0]["role"] == "system"
    assert kwargs["messages"][1:] == [
        {"role": "assistant", "content": "What kind of anime?"},
        {"role": "user", "content": "Giant robots and grief"},
    ]


def test_without_client_a_canned_reply_is_returned():
    drafter = StoryDrafter(client=None, rng=random.Random(3))
    assert drafter.client is None
    message = DraftMessage(role="user", content="A romance in space")

    reply = drafter.reply([message])

    assert reply.role == "assistant"
    assert reply.content in canned_replies(message.content)


def test_model_failure_falls_back_to_canned_reply():
    client = MagicMock()
    client.chat.completions.create.side_effect = RuntimeError("quota")
    drafter = StoryDrafter(client=client, rng=random.Random(0))

    reply = drafter.reply([DraftMessage(role="user", content="hero story")])
    assert reply.content in canned_replies("hero story")


def test_empty_model_reply_falls_back():
    drafter = StoryDrafter(client=openai_stub(content=""), rng=random.Random(1))
    reply = drafter.reply([DraftMessage(role="user", content="anything")])
    assert reply.content in canned_replies("anything")


def test_first_canned_reply_carries_genre_hint():
    assert "**Genre:** Romance / Fantasy" in canned_replies("romance")[0]
