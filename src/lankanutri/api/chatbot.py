"""Chatbot endpoints."""

from fastapi import APIRouter, Depends

from lankanutri.api.dependencies import get_container
from lankanutri.api.schemas import ChatRequest, ClearChatRequest
from lankanutri.containers import AppContainer

router = APIRouter(prefix="/api/chatbot", tags=["chatbot"])


@router.post("/new")
def new_conversation(container: AppContainer = Depends(get_container)) -> dict:
    reply = container.chat_service.start_conversation()
    return {"conversationId": reply.conversation_id, "message": reply.message}


@router.post("/chat")
async def chat(
    payload: ChatRequest, container: AppContainer = Depends(get_container)
) -> dict:
    """Send a message and return the assistant's reply."""
    reply = await container.chat_service.chat(payload.message, payload.conversation_id)
    return {"message": reply.message, "conversationId": reply.conversation_id}


@router.post("/clear")
def clear(
    payload: ClearChatRequest | None = None,
    container: AppContainer = Depends(get_container),
) -> dict:
    conversation_id = payload.conversation_id if payload else None
    return {"message": container.chat_service.clear(conversation_id)}
