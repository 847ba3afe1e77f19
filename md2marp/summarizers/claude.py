"""
Claude summarization backend (Anthropic).
"""

import os
from typing import Optional

from anthropic import Anthropic

from md2marp.summarizers.base import BaseSummarizer


class ClaudeSummarizer(BaseSummarizer):
    """Summarize slides with Anthropic Claude."""

    DEFAULT_MODEL = "claude-3-5-sonnet-20241022"

    SYSTEM_PROMPT = "You turn document sections into concise presentation slides."

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 1024,
        prompt_template: Optional[str] = None,
    ):
        super().__init__(prompt_template=prompt_template)

        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ValueError(
                "Anthropic API key required. Set ANTHROPIC_API_KEY env var or pass api_key parameter."
            )

        self.client = Anthropic(api_key=self.api_key)
        self.model = model or os.getenv("ANTHROPIC_MODEL", self.DEFAULT_MODEL)
        self.max_tokens = max_tokens

    def complete(self, prompt: str) -> str:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=self.SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )

        return "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
