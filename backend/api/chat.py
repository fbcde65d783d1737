"""
Avatar chat routes.
"""

import logging

from fastapi import APIRouter, HTTPException

from backend.avatar.personalities import AVATARS_3D, PERSONALITIES
from backend.core.errors import QuotaExceededError, ServiceUnavailableError
from backend.schemas.chat import ChatRequest, ChatResponse
from backend.services.chat_service import generate_reply

logger = logging.getLogger(__name__)
router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Next avatar reply",
    description="Send the conversation so far; the personality's system prompt is added server-side. 429 on provider quota, 503 when no provider is configured.",
)
def post_chat(body: ChatRequest) -> ChatResponse:
    logger.info("[api:post_chat] IN  messages=%d personality=%s mood=%s", len(body.messages), body.personality_id, body.mood)
    messages = [m.model_dump() for m in body.messages]
    try:
        reply = generate_reply(messages, personality_id=body.personality_id, mood=body.mood)
    except QuotaExceededError as e:
        raise HTTPException(status_code=429, detail=e.message) from e
    except ServiceUnavailableError as e:
        raise HTTPException(status_code=503, detail=e.message) from e
    except Exception as e:
        logger.exception("Chat failed")
        raise HTTPException(status_code=500, detail="Failed to generate response. Please try again.") from e
    return ChatResponse(message=reply)


@router.get("/personalities", summary="Available avatar personalities")
def get_personalities() -> dict:
    return {
        "personalities": [
            {"id": p.id, "name": p.name, "description": p.description} for p in PERSONALITIES.values()
        ]
    }


@router.get("/avatars", summary="3D avatar models")
def get_avatars() -> dict:
    return {"avatars": AVATARS_3D}
