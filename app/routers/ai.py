# =============================================================================
# app/routers/ai.py - AI Chat Endpoint
# =============================================================================

from fastapi import APIRouter

from app.dependencies import AssistantDep
from core.models.gateway import AiChatRequest, AiChatResponse

router = APIRouter()


@router.post("/chat", response_model=AiChatResponse)
async def chat(body: AiChatRequest, assistant: AssistantDep):
    """
    Ask the Betta Expert assistant.

    Send the previous turns in `history`; only the most recent ones are
    forwarded to the model.
    """
    reply = await assistant.reply(body.message, body.history)
    return AiChatResponse(reply=reply)
