"""
Query tool handlers: direct prompts (v1) and multi-source search (v2).
"""

from typing import Dict, Any, List, Sequence

from mcp.types import TextContent
from pydantic import BaseModel

from gemini_mcp.errors import EmptyResponseError, ToolInputError
from gemini_mcp.extraction import (
    Citation,
    Source,
    SourceResult,
    extract_answer,
    extract_citations,
    extract_results,
    rank_results,
)
from gemini_mcp.gemini_client import GenerationConfig, ModelVariant
from gemini_mcp.logging_utils import get_logger
from .decorators import mcp_tool
from .schemas.query import QueryParams, SearchParams
from .shared import GenerationService, get_generation_client
from .types import ResponseMetadata, ToolResponse, build_generation_config, resolve_model
from .utils import json_response, require_text, text_response

logger = get_logger(__name__)

SEARCH_TEMPERATURE = 0.3
SEARCH_MAX_TOKENS = 2048


class SearchResult(BaseModel):
    answer: str
    results: List[SourceResult]
    citations: List[Citation]


# ============================================================================
# v1: gemini-query
# ============================================================================

async def execute_query(params: QueryParams, client: GenerationService) -> str:
    """Send the prompt unchanged; only caller-given sampling values are sent."""
    require_text(params.prompt, "Prompt")
    model = ModelVariant.from_str(params.model)
    logger.debug(f"Query tool (legacy): model={model.value}, prompt_len={len(params.prompt)}")

    config = None
    if params.temperature is not None or params.max_output_tokens is not None:
        config = GenerationConfig(
            temperature=params.temperature,
            max_output_tokens=params.max_output_tokens,
        )

    response = await client.generate_content(params.prompt, model, config)
    if not response.text.strip():
        raise EmptyResponseError("Empty response from Gemini API")

    logger.debug(f"Query tool (legacy): response_len={len(response.text)}")
    return response.text


@mcp_tool("gemini-query", slow_after=60.0)
async def handle_query(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Send direct queries to Gemini models"""
    params = QueryParams.model_validate(arguments)
    text = await execute_query(params, get_generation_client())
    return text_response(text)


# ============================================================================
# v2: gemini-search-v2
# ============================================================================

def select_sources(params: SearchParams) -> List[Source]:
    """Apply the source_ids filter; at least one source must survive."""
    source_ids = params.filters.source_ids if params.filters else None
    if source_ids is None:
        return list(params.sources)
    wanted = set(source_ids)
    selected = [s for s in params.sources if s.id in wanted]
    if not selected:
        raise ToolInputError("No sources match the filter criteria")
    return selected


def build_search_prompt(query: str, sources: List[Source]) -> str:
    prompt = (
        "You are performing a semantic search across multiple sources.\n\n"
        f"Query: {query}\n\n"
        "Sources:\n\n"
    )
    for source in sources:
        prompt += f"--- Source: {source.title} (ID: {source.id}) ---\n{source.content}\n\n"
    prompt += (
        "Based on the query, provide:\n"
        "1. A direct answer to the query\n"
        "2. For each relevant source, provide:\n"
        "   - Source ID and title\n"
        "   - A brief excerpt showing relevance\n"
        "   - Relevance score (0.0-1.0)\n"
        "3. If applicable, include direct quotes as citations\n\n"
        "Format your response clearly with sections for Answer, Results, and Citations."
    )
    return prompt


async def execute_search(params: SearchParams, client: GenerationService) -> ToolResponse[SearchResult]:
    logger.info(
        f"Search v2: query='{params.query}', sources={len(params.sources)}, "
        f"include_citations={params.include_citations}"
    )
    require_text(params.query, "Query")
    if not params.sources:
        raise ToolInputError("At least one source is required")

    sources = select_sources(params)
    logger.debug(f"Filtered to {len(sources)} sources")

    model = resolve_model(params.model)
    config = build_generation_config(params.params, SEARCH_TEMPERATURE, SEARCH_MAX_TOKENS)
    response = await client.generate_content(build_search_prompt(params.query, sources), model, config)
    logger.debug(f"Search response: {len(response.text)} chars")

    filters = params.filters
    results = rank_results(
        extract_results(response.text, sources),
        ranking=params.ranking,
        min_relevance=filters.min_relevance if filters else None,
        max_results=filters.max_results if filters else None,
    )
    citations = extract_citations(response.text, sources) if params.include_citations else []

    logger.info(f"Search complete: {len(results)} results, {len(citations)} citations")

    return ToolResponse[SearchResult](
        result=SearchResult(
            answer=extract_answer(response.text),
            results=results,
            citations=citations,
        ),
        metadata=ResponseMetadata.with_usage(response.model, response.usage),
    )


@mcp_tool("gemini-search-v2", slow_after=60.0)
async def handle_search_v2(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Multi-source semantic search with citations and ranking"""
    params = SearchParams.model_validate(arguments)
    response = await execute_search(params, get_generation_client())
    return json_response(response)
