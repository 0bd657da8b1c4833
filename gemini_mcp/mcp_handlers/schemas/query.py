from typing import Optional, Literal, List
from pydantic import BaseModel, Field

from gemini_mcp.extraction import Source
from .mixins import GenerationOptionsMixin


class QueryParams(BaseModel):
    """
    Send a prompt straight to Gemini (v1).
    """
    prompt: str = Field(description="The prompt to send")
    model: str = Field(
        default="pro",
        description="Model preference ('pro' or 'flash')."
    )
    temperature: Optional[float] = Field(
        default=None,
        description="Sampling temperature"
    )
    max_output_tokens: Optional[int] = Field(
        default=None,
        description="Maximum tokens in the reply"
    )


class SearchFilters(BaseModel):
    source_ids: Optional[List[str]] = Field(
        default=None,
        description="Limit search to specific source IDs"
    )
    min_relevance: Optional[float] = Field(
        default=None,
        description="Minimum relevance score (0-1)"
    )
    max_results: Optional[int] = Field(
        default=None,
        description="Maximum number of results"
    )


class SearchParams(GenerationOptionsMixin):
    """
    Multi-source semantic search with citations and ranking (v2).
    """
    query: str = Field(description="The search query")
    sources: List[Source] = Field(description="Sources to search across")
    filters: Optional[SearchFilters] = Field(
        default=None,
        description="Search filters"
    )
    ranking: Literal["relevance", "recency", "popularity"] = Field(
        default="relevance",
        description="Ranking criteria"
    )
    include_citations: bool = Field(
        default=True,
        description="Include citations in results"
    )
