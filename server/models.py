"""
Pydantic models for API requests/responses.
"""

from typing import Optional, List, Literal
from pydantic import BaseModel, Field


class ConversionSettings(BaseModel):
    """Settings for a conversion."""
    provider: Literal["gemini", "anthropic"] = Field(default="gemini", description="LLM provider")
    summarize: bool = Field(default=True, description="Summarize each slide with the LLM")
    batch_size: int = Field(default=13, ge=1, le=15, description="Slides per summarization batch")
    batch_delay: float = Field(default=62.0, ge=0, description="Seconds between batches")
    theme: Optional[str] = Field(default=None, description="Marp theme name or index")
    generate_title: bool = Field(default=False, description="Generate a title when none is given")
    drop_leading_slide: bool = Field(default=False, description="Drop the first slide")
    autolink_text: str = Field(default="Link", description="Anchor text for bare links")

    model_config = {
        "json_schema_extra": {
            "example": {
                "provider": "gemini",
                "summarize": True,
                "batch_size": 13,
                "batch_delay": 62.0,
                "theme": "gaia",
                "generate_title": False,
                "drop_leading_slide": False,
                "autolink_text": "Link",
            }
        }
    }


class ConversionRequest(ConversionSettings):
    """Request to convert Markdown text."""
    markdown: str = Field(..., description="Markdown document")
    title: Optional[str] = Field(default=None, description="Deck title")


class ConversionResponse(BaseModel):
    """Converted deck."""
    marp: str
    slide_count: int = 0
    title: Optional[str] = None
    failed_slides: List[int] = Field(default_factory=list)


class ThemeInfo(BaseModel):
    """An available Marp theme."""
    index: int
    name: str
    directives: List[str] = Field(default_factory=list)
