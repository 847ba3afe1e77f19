"""
LLM summarization backends for turning slide bodies into bullet points.

Supports multiple backends:
- Gemini (primary, google-genai)
- Claude (Anthropic)
"""

from md2marp.summarizers.base import BaseSummarizer
from md2marp.summarizers.batch import BatchSummarizer, partition_batches

PROVIDERS = ("gemini", "anthropic")


def get_summarizer(provider: str = "gemini", **kwargs) -> BaseSummarizer:
    """Build the summarizer backend for a provider name."""
    if provider == "gemini":
        from md2marp.summarizers.gemini import GeminiSummarizer
        return GeminiSummarizer(**kwargs)
    elif provider == "anthropic":
        from md2marp.summarizers.claude import ClaudeSummarizer
        return ClaudeSummarizer(**kwargs)
    else:
        raise ValueError(f"Unknown provider: {provider}")


__all__ = [
    "BaseSummarizer",
    "BatchSummarizer",
    "partition_batches",
    "get_summarizer",
    "PROVIDERS",
]
