"""Schemas for the avatar chat endpoint."""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """Request body for POST /api/chat. The client sends the whole conversation each turn."""

    messages: list[ChatMessage] = Field(..., description="Conversation so far, oldest first.")
    personality_id: str | None = Field(None, alias="personalityId", description="alegra | empatico | intenso")
    mood: str | None = Field(None, description="Legacy: happy | calm | intense")

    model_config = {"populate_by_name": True}


class ChatResponse(BaseModel):
    message: str = Field(..., description="Assistant reply, short enough to be spoken aloud.")
