"""
Summarize tool handlers.

gemini-summarize (v1) maps its detail_level/format vocabulary onto the v2
executor and returns only the summary text.
"""

from typing import Dict, Any, List, Sequence

from mcp.types import TextContent
from pydantic import BaseModel

from gemini_mcp.errors import ToolInputError
from gemini_mcp.extraction import count_words, extract_key_topics
from gemini_mcp.logging_utils import get_logger
from .decorators import mcp_tool
from .schemas.summarize import LegacySummarizeParams, SummarizeParams
from .shared import GenerationService, get_generation_client
from .types import ResponseMetadata, ToolResponse, build_generation_config, resolve_model
from .utils import json_response, require_text, text_response

logger = get_logger(__name__)

MAX_CONTENT_CHARS = 1_000_000
SUMMARY_TEMPERATURE = 0.4

# length -> (instruction, default output budget)
LENGTH_SETTINGS = {
    "brief": ("Provide a very brief, concise summary (2-3 sentences max).", 256),
    "medium": ("Provide a balanced summary with key points and main themes.", 1024),
    "detailed": ("Provide a comprehensive, detailed summary covering all key points and nuances.", 2048),
}

FORMAT_INSTRUCTIONS = {
    "paragraph": "Format the summary as coherent paragraphs.",
    "bullet_points": "Format the summary as bullet points.",
    "executive": "Format as an executive summary with clear sections.",
    "key_points": "Extract and list only the key takeaways.",
}


class SummaryResult(BaseModel):
    summary: str
    word_count: int
    key_topics: List[str]


def build_summary_prompt(params: SummarizeParams) -> str:
    detail_instruction, _ = LENGTH_SETTINGS[params.length]
    prompt = (
        f"Summarize the following content:\n\n{params.content}\n\n"
        f"{detail_instruction}\n\n{FORMAT_INSTRUCTIONS[params.format]}"
    )
    if params.focus:
        prompt += f"\n\nFocus specifically on: {params.focus}"
    return prompt


async def execute_summarize(params: SummarizeParams, client: GenerationService) -> ToolResponse[SummaryResult]:
    logger.info(
        f"Summarize v2: length={params.length}, format={params.format}, "
        f"content_len={len(params.content)}"
    )
    require_text(params.content, "Content")
    if len(params.content) > MAX_CONTENT_CHARS:
        raise ToolInputError("Content too large (max 1M characters)")

    _, max_tokens = LENGTH_SETTINGS[params.length]
    model = resolve_model(params.model)
    config = build_generation_config(params.params, SUMMARY_TEMPERATURE, max_tokens)

    response = await client.generate_content(build_summary_prompt(params), model, config)
    logger.debug(f"Summary generated: {len(response.text)} chars")

    return ToolResponse[SummaryResult](
        result=SummaryResult(
            summary=response.text,
            word_count=count_words(response.text),
            key_topics=extract_key_topics(response.text),
        ),
        metadata=ResponseMetadata.with_usage(response.model, response.usage),
    )


@mcp_tool("gemini-summarize", slow_after=60.0)
async def handle_summarize(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Summarize content at a chosen level of detail"""
    legacy = LegacySummarizeParams.model_validate(arguments)
    response = await execute_summarize(legacy.to_v2(), get_generation_client())
    return text_response(response.result.summary)


@mcp_tool("gemini-summarize-v2", slow_after=60.0)
async def handle_summarize_v2(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Summarization with key topics extraction and word count"""
    params = SummarizeParams.model_validate(arguments)
    response = await execute_summarize(params, get_generation_client())
    return json_response(response)
