"""
Narrative Generation
Turns a prompt context into plain-English insight text using OpenAI.
"""

import logging
from typing import Optional, Protocol

from openai import AsyncOpenAI

from cashlens.config import NarrativeConfig
from cashlens.core.exceptions import CashlensError
from cashlens.insights.prompts import PromptContext

logger = logging.getLogger(__name__)

FALLBACK_NARRATIVE = "Unable to generate insight."


class NarrativeGenerator(Protocol):
    """Opaque, possibly slow, possibly failing text completion capability."""

    async def generate_text(self, context: PromptContext) -> str:
        ...


class OpenAINarrativeGenerator:
    """Narrative generator backed by OpenAI chat completions."""

    def __init__(self, config: NarrativeConfig, client: Optional[AsyncOpenAI] = None):
        """
        Initialize OpenAI client.

        Raises:
            ValueError: If no API key is configured and no client is supplied
        """
        if client is None and not config.api_key:
            raise ValueError("OPENAI_API_KEY is not configured")

        self.client = client or AsyncOpenAI(api_key=config.api_key)
        self.config = config

    async def generate_text(self, context: PromptContext) -> str:
        """
        Generate narrative text for one insight.

        Returns:
            Completion text, possibly empty

        Raises:
            Exception: If the API call fails
        """
        response = await self.client.chat.completions.create(
            model=self.config.model,
            messages=[
                {
                    "role": "system",
                    "content": context.system_prompt,
                },
                {
                    "role": "user",
                    "content": context.user_prompt,
                },
            ],
            temperature=self.config.temperature,
            max_tokens=(
                self.config.extended_max_tokens if context.extended else self.config.max_tokens
            ),
        )

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


class UnavailableNarrativeGenerator:
    """Stand-in when no OpenAI key is configured; every insight gets the fallback text."""

    def __init__(self, reason: str):
        self.reason = reason

    async def generate_text(self, context: PromptContext) -> str:
        raise CashlensError(self.reason)


async def narrate(generator: NarrativeGenerator, context: PromptContext) -> str:
    """
    Generate narrative text, falling back to a fixed string.

    Failures and empty responses never propagate; the numeric payload
    stays authoritative without prose.
    """
    try:
        text = await generator.generate_text(context)
    except Exception as e:
        logger.warning("Narrative generation failed, using fallback: %s", e)
        return FALLBACK_NARRATIVE

    if not text or not text.strip():
        logger.warning("Narrative generation returned empty text, using fallback")
        return FALLBACK_NARRATIVE

    return text
