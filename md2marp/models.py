"""
Core data models for md2marp.

Slides, deferred images and summarization outcomes, validated with Pydantic.
"""

from typing import List, Optional, Dict, Any, Iterable
from pydantic import BaseModel, Field


class Slide(BaseModel):
    """A single slide: the heading text and the Markdown body below it."""

    title: str
    content: str = ""

    def append(self, text: str) -> None:
        self.content += text


class DeferredImage(BaseModel):
    """
    An image pulled out of a slide during segmentation.

    Images are not inlined; they are re-attached to their owning slide
    after summarization so the model never sees (or drops) them.
    """

    markup: str
    owner_slide: int = Field(ge=1, description="1-based position of the owning slide")


class SegmentationResult(BaseModel):
    """Slides produced by the segmenter plus the images they own."""

    slides: List[Slide] = Field(default_factory=list)
    images: List[DeferredImage] = Field(default_factory=list)

    def images_for(self, position: int) -> List[DeferredImage]:
        """Images owned by the slide at a 1-based position, in recorded order."""
        return [image for image in self.images if image.owner_slide == position]

    def attach_images(self, positions: Optional[Iterable[int]] = None) -> int:
        """
        Append deferred image markup to the owning slides.

        Args:
            positions: 1-based slide positions to attach; all slides if None

        Returns:
            Number of images attached
        """
        wanted = set(positions) if positions is not None else None
        attached = 0

        for image in self.images:
            if wanted is not None and image.owner_slide not in wanted:
                continue
            if image.owner_slide > len(self.slides):
                continue
            self.slides[image.owner_slide - 1].append(image.markup + "\n")
            attached += 1

        return attached

    def drop_leading_slide(self) -> "SegmentationResult":
        """
        Return a copy without the first slide.

        Images of the dropped slide are discarded; the rest keep pointing at
        the slide they were found under.
        """
        if not self.slides:
            return self.model_copy(deep=True)

        images = [
            DeferredImage(markup=image.markup, owner_slide=image.owner_slide - 1)
            for image in self.images
            if image.owner_slide > 1
        ]
        slides = [slide.model_copy() for slide in self.slides[1:]]
        return SegmentationResult(slides=slides, images=images)

    def to_dict(self) -> Dict[str, Any]:
        """Export to dict for JSON serialization."""
        return self.model_dump(mode="json")


class SummaryOutcome(BaseModel):
    """Result of one summarization task, collected at the batch join."""

    position: int = Field(ge=1)
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


class ConversionResult(BaseModel):
    """Output of a full Markdown -> Marp conversion."""

    marp: str
    slide_count: int = Field(ge=0, default=0)
    title: Optional[str] = None
    failed_slides: List[int] = Field(default_factory=list)
