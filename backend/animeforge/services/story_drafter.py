# animeforge/services/story_drafter.py

from __future__ import annotations

import logging
import random
from typing import List, Optional

from openai import OpenAI

from animeforge.core.config import settings
from animeforge.schemas.draft import DraftMessage

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = """✨ **Welcome to AnimeForge!**

I'm your AI Co-Creator, and I'm thrilled to help you bring your anime vision to life!

Let's start with the basics. What kind of anime would you like to create?

**Some ideas to spark your imagination:**
• 🗡️ An epic shonen adventure with powerful battles
• 💕 A heartwarming romance with supernatural elements
• 🌌 A sci-fi thriller set in a dystopian future
• 🏫 A slice-of-life story in a magical academy
• 🔮 A dark fantasy with complex moral choices

Tell me your vision. Even a rough idea works! I'll help you shape it into something amazing."""

QUICK_PROMPTS = [
    "A story about a young hero discovering hidden powers",
    "A romance between rivals in a magical academy",
    "A mystery thriller in a cyberpunk city",
    "An isekai adventure in a fantasy world",
]


def genre_hint(user_input: str) -> str:
    if "romance" in user_input:
        return "Romance / Fantasy"
    if "hero" in user_input:
        return "Shonen / Action"
    return "Fantasy / Adventure"


def canned_replies(user_input: str) -> List[str]:
    return [
        f"""That's a fantastic concept! I love the direction you're taking.

Let me help you develop this further. Here's what I'm envisioning:

**Genre:** {genre_hint(user_input)}

**Core Conflict:** A powerful internal and external struggle that drives the narrative.

Now, let's dig deeper:

1. **Setting:** Where does this story take place? A modern city with hidden magic? A completely fantastical world? A future Earth?

2. **Time Period:** Is this contemporary, historical, or futuristic?

3. **Mood:** Should this feel dark and gritty, lighthearted and fun, or somewhere in between?

What speaks to you?""",
        """Excellent choice! I can already see this anime taking shape.

**Working Title Ideas:**
• "Echoes of the Forgotten"
• "The Last Horizon"
• "Shattered Stars"

Let's establish your world's rules:

**Key Questions:**
• What makes your world unique? (Magic system, technology, society structure)
• What's the biggest threat or mystery?
• What resources or powers are people fighting over?

Tell me more about the world you're imagining! 🌟""",
    ]


class StoryDrafter:
    """
    Chat co-creator for the /create flow.
    Uses an OpenAI chat model when a key is configured, canned replies otherwise.
    """

    def __init__(self, client: Optional[OpenAI] = None, model: Optional[str] = None, rng: Optional[random.Random] = None):
        self.model = model or settings.DRAFTER_MODEL
        self.rng = rng or random.Random()
        if client is not None:
            self.client = client
        elif settings.OPENAI_API_KEY:
            self.client = OpenAI(api_key=settings.OPENAI_API_KEY)
        else:
            self.client = None

    def welcome(self) -> DraftMessage:
        return DraftMessage(role="assistant", content=WELCOME_MESSAGE)

    def reply(self, messages: List[DraftMessage]) -> DraftMessage:
        user_input = messages[-1].content if messages else ""

        if self.client is not None:
            try:
                return DraftMessage(role="assistant", content=self._call_openai(messages))
            except Exception as e:
                logger.warning("Drafter model call failed, using canned reply: %s", e)

        return DraftMessage(role="assistant", content=self.rng.choice(canned_replies(user_input)))

    def _call_openai(self, messages: List[DraftMessage]) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "system", "content": self._system_prompt()}]
            + [{"role": m.role, "content": m.content} for m in messages],
            temperature=0.8,
            max_tokens=1200,
        )
        content = response.choices[0].message.content
        if not content:
            raise ValueError("Empty reply from model")
        return content

    def _system_prompt(self) -> str:
        return """
You are the AI Co-Creator of AnimeForge, helping a writer shape an anime story.

--- OBJECTIVE ---
Turn a rough idea into the pieces of a story bible: genre, setting, core
conflict, themes, world rules, main characters and a three-act outline.

--- RULES ---
• Be enthusiastic but concrete; build on what the writer already said.
• Ask at most three focused follow-up questions per reply.
• Use **bold** labels for named elements and • bullets for options.
• Never write the whole story for the writer; propose, then ask.
""".strip()
