"""Unified LLM client — tries OpenAI first, falls back to Anthropic."""

import logging

from openai import AsyncOpenAI
import anthropic

from app.config import settings
from app.errors import UpstreamAuthError, UpstreamUnavailable
from app.services.recommendation.config import recommendation_config

logger = logging.getLogger(__name__)

cfg = recommendation_config.llm


class LLMClient:
    """Unified async LLM client with OpenAI primary + Anthropic fallback."""

    def __init__(self):
        self._openai = None
        self._anthropic = None

        if settings.openai_api_key:
            self._openai = AsyncOpenAI(api_key=settings.openai_api_key, timeout=settings.llm_timeout)
        if settings.anthropic_api_key:
            self._anthropic = anthropic.AsyncAnthropic(
                api_key=settings.anthropic_api_key, timeout=settings.llm_timeout
            )

    async def complete(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int = cfg.max_tokens,
        temperature: float = cfg.temperature,
        json_mode: bool = False,
    ) -> str:
        """Get a completion from the best available LLM.

        Args:
            system: System prompt
            user: User message
            max_tokens: Max output tokens
            temperature: Sampling temperature
            json_mode: If True, force JSON output (OpenAI response_format)

        Returns:
            Raw text response from the LLM.

        Raises:
            UpstreamAuthError if no provider is configured.
            UpstreamUnavailable if every configured provider fails.
        """
        if not self._openai and not self._anthropic:
            raise UpstreamAuthError("No LLM provider configured")

        errors = []
        chat_messages = [{"role": "user", "content": user}]

        # Try OpenAI first
        if self._openai:
            try:
                openai_messages = [{"role": "system", "content": system}] + chat_messages
                kwargs: dict = {
                    "model": cfg.model_primary,
                    "max_tokens": max_tokens,
                    "temperature": temperature,
                    "messages": openai_messages,
                }
                if json_mode:
                    kwargs["response_format"] = {"type": "json_object"}
                response = await self._openai.chat.completions.create(**kwargs)
                content = response.choices[0].message.content
                if not content:
                    raise ValueError("empty completion")
                return content.strip()
            except Exception as e:
                errors.append(f"OpenAI: {e}")
                logger.warning(f"OpenAI failed, trying Anthropic: {e}")

        # Fallback to Anthropic
        if self._anthropic:
            try:
                response = await self._anthropic.messages.create(
                    model=cfg.model_fallback,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    system=system,
                    messages=chat_messages,
                )
                return response.content[0].text.strip()
            except Exception as e:
                errors.append(f"Anthropic: {e}")
                logger.warning(f"Anthropic also failed: {e}")

        raise UpstreamUnavailable(f"All LLM providers failed: {'; '.join(errors)}")


# Singleton
llm_client = LLMClient()
