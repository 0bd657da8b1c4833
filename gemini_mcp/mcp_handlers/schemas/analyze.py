from typing import Annotated, Optional, Union, Literal, List
from pydantic import BaseModel, Field

from .mixins import GenerationOptionsMixin


class AnalyzeCodeParams(BaseModel):
    """
    Analyze a piece of code (v1).
    """
    code: str = Field(description="The code to analyze")
    language: Optional[str] = Field(
        default=None,
        description="Programming language (helps the model)"
    )
    focus: Literal["general", "quality", "security", "performance", "bugs"] = Field(
        default="general",
        description="Aspect to concentrate on"
    )


class AnalyzeTextParams(BaseModel):
    """
    Analyze a piece of prose (v1).
    """
    text: str = Field(description="The text to analyze")
    focus: Optional[str] = Field(
        default=None,
        description="Optional aspect to concentrate on"
    )


class CodeAnalyzerParams(BaseModel):
    language: Optional[str] = None


class ComparisonAnalyzerParams(BaseModel):
    compare_with: str = Field(description="Text to compare the content against")


class TextAnalyzer(BaseModel):
    type: Literal["text"]


class CodeAnalyzer(BaseModel):
    type: Literal["code"]
    params: Optional[CodeAnalyzerParams] = None


class DocumentAnalyzer(BaseModel):
    type: Literal["document"]


class SentimentAnalyzer(BaseModel):
    type: Literal["sentiment"]


class ComparisonAnalyzer(BaseModel):
    type: Literal["comparison"]
    params: ComparisonAnalyzerParams


AnalyzerType = Annotated[
    Union[TextAnalyzer, CodeAnalyzer, DocumentAnalyzer, SentimentAnalyzer, ComparisonAnalyzer],
    Field(discriminator="type"),
]


class AnalyzerOptions(BaseModel):
    focus_areas: Optional[List[str]] = Field(
        default=None,
        description="Specific aspects to focus on"
    )
    detail_level: Literal["brief", "standard", "comprehensive"] = Field(
        default="standard",
        description="Level of detail in analysis"
    )


class AnalyzeParams(GenerationOptionsMixin):
    """
    Unified analyzer: text, code, document, sentiment, comparison (v2).
    """
    content: str = Field(description="The content to analyze")
    analyzer_type: AnalyzerType = Field(description="Type of analyzer to use")
    options: Optional[AnalyzerOptions] = Field(
        default=None,
        description="Analyzer options"
    )
