"""
Avatar chat LLM: OpenAI (primary) or Hugging Face (fallback).
When OPENAI_API_KEY is set, uses OpenAI chat completions; otherwise uses the HF router.
"""

import logging
from typing import Any

import httpx
import openai
from openai import OpenAI

from backend.core.config import (
    CHAT_MAX_TOKENS,
    CHAT_MODEL,
    CHAT_TEMPERATURE,
    HF_API_KEY,
    HF_CHAT_URL,
    HF_LLM_MODEL,
    LLM_API_TIMEOUT,
    OPENAI_API_KEY,
)
from backend.core.errors import QuotaExceededError, ServiceUnavailableError

logger = logging.getLogger(__name__)

QUOTA_MESSAGE = "API quota exceeded. The AI chat feature is temporarily unavailable."


def _is_quota_error(message: str) -> bool:
    return "quota" in message.lower() or "429" in message


def _call_openai(messages: list[dict[str, Any]], max_tokens: int, temperature: float) -> str:
    """Call OpenAI chat completions. Returns generated text."""
    client = OpenAI(api_key=OPENAI_API_KEY, timeout=LLM_API_TIMEOUT)
    try:
        response = client.chat.completions.create(
            model=CHAT_MODEL,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
    except openai.RateLimitError as e:
        raise QuotaExceededError(QUOTA_MESSAGE) from e
    except openai.APIError as e:
        if _is_quota_error(str(e)):
            raise QuotaExceededError(QUOTA_MESSAGE) from e
        raise
    msg = response.choices[0].message if response.choices else None
    out = ((msg.content if msg else None) or "").strip()
    logger.info("[llm:openai] OUT response_len=%d", len(out))
    return out


def _call_hf(messages: list[dict[str, Any]], max_tokens: int, temperature: float) -> str:
    """Call Hugging Face router chat completions. Returns generated text."""
    headers = {"Authorization": f"Bearer {HF_API_KEY}", "Content-Type": "application/json"}
    payload = {
        "model": HF_LLM_MODEL,
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
    }
    with httpx.Client(timeout=LLM_API_TIMEOUT) as client:
        response = client.post(HF_CHAT_URL, json=payload, headers=headers)
    if response.status_code == 429 or (response.status_code != 200 and _is_quota_error(response.text)):
        logger.warning("[llm:hf] quota error %s", response.status_code)
        raise QuotaExceededError(QUOTA_MESSAGE)
    if response.status_code != 200:
        logger.warning("[llm:hf] HF LLM error %s: %s", response.status_code, response.text[:200])
        raise RuntimeError(f"HF LLM error {response.status_code}")
    data = response.json()
    choices = data.get("choices") or []
    out = ""
    if choices and isinstance(choices[0], dict):
        msg = choices[0].get("message") or {}
        out = (msg.get("content") or "").strip()
    logger.info("[llm:hf] OUT response_len=%d", len(out))
    return out


def chat_completion(
    messages: list[dict[str, Any]],
    max_tokens: int = CHAT_MAX_TOKENS,
    temperature: float = CHAT_TEMPERATURE,
) -> str:
    """
    Generate the next assistant turn for a full message list (system prompt included).

    Raises:
        ServiceUnavailableError: neither OPENAI_API_KEY nor HF_API_KEY is configured.
        QuotaExceededError: the provider reported quota or rate limiting.
    """
    logger.info("[llm] IN  messages=%d max_tokens=%d", len(messages), max_tokens)
    if OPENAI_API_KEY:
        return _call_openai(messages, max_tokens, temperature)
    if HF_API_KEY:
        return _call_hf(messages, max_tokens, temperature)
    logger.warning("[llm] no OPENAI_API_KEY or HF_API_KEY configured")
    raise ServiceUnavailableError("AI chat is not configured. Set OPENAI_API_KEY or HF_API_KEY.")
