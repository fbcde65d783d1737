"""
Avatar chat: wrap the conversation in the chosen personality's system prompt and
ask the LLM for the next reply. Conversation history lives in the client.
"""

import logging
from typing import Any

from backend.avatar.llm import chat_completion
from backend.avatar.personalities import resolve_personality

logger = logging.getLogger(__name__)


def generate_reply(
    messages: list[dict[str, Any]],
    personality_id: str | None = None,
    mood: str | None = None,
) -> str:
    personality = resolve_personality(personality_id, mood)
    full_messages = [{"role": "system", "content": personality.system_prompt}, *messages]
    logger.info(
        "[chat_service:generate_reply] IN  personality=%s messages=%d",
        personality.id,
        len(messages),
    )
    reply = chat_completion(full_messages)
    logger.info("[chat_service:generate_reply] OUT reply_len=%d", len(reply))
    return reply
