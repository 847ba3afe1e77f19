"""
Gemini summarization backend (google-genai).
"""

import os
from typing import Optional

from google import genai
from google.genai import types

from md2marp.summarizers.base import BaseSummarizer


class GeminiSummarizer(BaseSummarizer):
    """Summarize slides with Google Gemini."""

    DEFAULT_MODEL = "gemini-2.0-flash"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_output_tokens: int = 1024,
        temperature: Optional[float] = None,
        prompt_template: Optional[str] = None,
    ):
        super().__init__(prompt_template=prompt_template)

        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError(
                "Gemini API key required. Set GEMINI_API_KEY env var or pass api_key parameter."
            )

        self.client = genai.Client(api_key=self.api_key)
        self.model = model or os.getenv("GEMINI_MODEL", self.DEFAULT_MODEL)
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature

    def complete(self, prompt: str) -> str:
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                max_output_tokens=self.max_output_tokens,
                temperature=self.temperature,
            ),
        )

        # Only the first candidate is used
        candidates = response.candidates or []
        if not candidates or candidates[0].content is None:
            raise RuntimeError(f"Gemini returned no candidates (model {self.model})")

        parts = candidates[0].content.parts or []
        return "".join(part.text for part in parts if part.text)
