from typing import Optional, Literal
from pydantic import BaseModel, Field

from .mixins import GenerationOptionsMixin

SummaryLength = Literal["brief", "medium", "detailed"]
SummaryFormat = Literal["paragraph", "bullet_points", "executive", "key_points"]

# v1 vocabulary -> v2 vocabulary
LEGACY_DETAIL_LEVELS = {"brief": "brief", "moderate": "medium", "detailed": "detailed"}
LEGACY_FORMATS = {"bullets": "bullet_points", "paragraphs": "paragraph", "outline": "key_points"}


class SummarizeParams(GenerationOptionsMixin):
    """
    Summarization with key topics extraction and word count (v2).
    """
    content: str = Field(description="The text content to summarize")
    length: SummaryLength = Field(
        default="medium",
        description="Summary length: brief, medium, or detailed"
    )
    format: SummaryFormat = Field(
        default="paragraph",
        description="Summary format: paragraph, bullet_points, executive, or key_points"
    )
    focus: Optional[str] = Field(
        default=None,
        description="Optional focus area for the summary"
    )


class LegacySummarizeParams(BaseModel):
    """
    Summarize content (v1 vocabulary).
    """
    content: str = Field(description="The text content to summarize")
    detail_level: Literal["brief", "moderate", "detailed"] = Field(
        default="moderate",
        description="How much detail to keep"
    )
    format: Literal["bullets", "paragraphs", "outline"] = Field(
        default="paragraphs",
        description="Layout of the summary"
    )

    def to_v2(self) -> SummarizeParams:
        return SummarizeParams(
            content=self.content,
            length=LEGACY_DETAIL_LEVELS[self.detail_level],
            format=LEGACY_FORMATS[self.format],
        )
