from fastapi import APIRouter, Depends

from animeforge import schemas
from animeforge.api.dependencies import get_auth_session, get_story_drafter
from animeforge.services.auth_session import AuthSession
from animeforge.services.story_drafter import QUICK_PROMPTS, StoryDrafter

router = APIRouter(prefix="/drafts", tags=["drafts"])


@router.get("/starter", response_model=schemas.DraftStarter)
def starter(drafter: StoryDrafter = Depends(get_story_drafter)):
    return schemas.DraftStarter(welcome=drafter.welcome(), quick_prompts=QUICK_PROMPTS)


@router.post("/chat", response_model=schemas.DraftMessage)
def chat(
    chat_in: schemas.DraftChatRequest,
    auth: AuthSession = Depends(get_auth_session),
    drafter: StoryDrafter = Depends(get_story_drafter),
):
    return drafter.reply(chat_in.messages)
