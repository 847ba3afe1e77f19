"""
Base summarizer interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseSummarizer(ABC):
    """Abstract base class for all LLM summarization backends."""

    SUMMARY_PROMPT_TEMPLATE = """Summarize the content below as presentation-style bullet points.
If there is no content, output two blank characters.
Otherwise output only the summary.

Content:

{content}"""

    TITLE_PROMPT_TEMPLATE = """Create one short title for the content below.
Output only the title.
If there is no content, output nothing.

Content:

{content}"""

    def __init__(self, prompt_template: Optional[str] = None):
        self.prompt_template = prompt_template or self.SUMMARY_PROMPT_TEMPLATE
        self.name = self.__class__.__name__.replace("Summarizer", "").lower()

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        Send a single prompt to the model.

        Args:
            prompt: Full prompt text

        Returns:
            The model's text response
        """
        pass

    def summarize(self, content: str) -> str:
        """Summarize one slide's content into bullet points."""
        return self.complete(self.prompt_template.format(content=content))

    def generate_title(self, content: str) -> str:
        """
        Generate a short deck title from the whole document.

        Returns an empty string when the request fails.
        """
        prompt = self.TITLE_PROMPT_TEMPLATE.format(content=content)
        try:
            title = self.complete(prompt)
        except Exception as e:
            print(f"[ERROR] title generation failed ({self.name}): {e}")
            return ""
        return (title or "").strip()
