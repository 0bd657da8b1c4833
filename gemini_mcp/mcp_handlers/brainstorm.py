"""
Brainstorm tool handlers.

v2 asks for a numbered list, parses it into ideas and optionally reports
keywords shared by at least 30% of them. v1 is a single collaborative
exchange seeded with the caller's own thoughts.
"""

from typing import Dict, Any, List, Optional, Sequence

from mcp.types import TextContent
from pydantic import BaseModel

from gemini_mcp.extraction import (
    ConsensusTheme,
    Idea,
    extract_consensus_themes,
    parse_ideas,
)
from gemini_mcp.gemini_client import ModelVariant
from gemini_mcp.logging_utils import get_logger
from .decorators import mcp_tool
from .schemas.brainstorm import BrainstormParams, LegacyBrainstormParams
from .shared import GenerationService, get_generation_client
from .types import ResponseMetadata, ToolResponse, build_generation_config, resolve_model
from .utils import json_response, require_range, require_text, text_response

logger = get_logger(__name__)

BRAINSTORM_TEMPERATURE = 0.9
BRAINSTORM_MAX_TOKENS = 2048
MIN_IDEAS, MAX_IDEAS = 1, 50
MIN_ROUNDS, MAX_ROUNDS = 1, 10


class BrainstormResult(BaseModel):
    ideas: List[Idea]
    consensus_themes: Optional[List[ConsensusTheme]] = None


# ============================================================================
# v2: gemini-brainstorm-v2
# ============================================================================

def build_brainstorm_prompt(params: BrainstormParams) -> str:
    prompt = (
        f"Generate {params.num_ideas} creative, diverse ideas for the following topic:\n\n"
        f"{params.prompt}\n\n"
    )
    if params.constraints:
        prompt += f"Constraints: {params.constraints}\n\n"
    prompt += "List each idea on a new line, numbered (1., 2., 3., etc.).\n"
    prompt += "Make ideas specific, actionable, and varied in approach."
    return prompt


async def execute_brainstorm(params: BrainstormParams, client: GenerationService) -> ToolResponse[BrainstormResult]:
    logger.info(
        f"Brainstorm v2: topic_len={len(params.prompt)}, num_ideas={params.num_ideas}, "
        f"extract_consensus={params.extract_consensus}"
    )
    require_range(params.num_ideas, "num_ideas", MIN_IDEAS, MAX_IDEAS)
    require_text(params.prompt, "Topic")

    model = resolve_model(params.model)
    config = build_generation_config(params.params, BRAINSTORM_TEMPERATURE, BRAINSTORM_MAX_TOKENS)
    response = await client.generate_content(build_brainstorm_prompt(params), model, config)
    logger.debug(f"Ideas generated: {len(response.text)} chars")

    ideas = parse_ideas(response.text)
    logger.info(f"Parsed {len(ideas)} ideas")
    themes = extract_consensus_themes(ideas) if params.extract_consensus else None

    return ToolResponse[BrainstormResult](
        result=BrainstormResult(ideas=ideas, consensus_themes=themes),
        metadata=ResponseMetadata.with_usage(response.model, response.usage),
    )


@mcp_tool("gemini-brainstorm-v2", slow_after=60.0)
async def handle_brainstorm_v2(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Idea generation with consensus theme extraction"""
    params = BrainstormParams.model_validate(arguments)
    response = await execute_brainstorm(params, get_generation_client())
    return json_response(response)


# ============================================================================
# v1: gemini-brainstorm
# ============================================================================

def format_legacy_brainstorm(claude_thoughts: str, reply: str) -> str:
    """Synthesis followed by the single recorded exchange round."""
    history = f"Round 1\nClaude: {claude_thoughts}\nGemini: {reply}"
    return f"# Synthesis\n\n{reply}\n\n# Conversation History\n\n{history}"


async def execute_legacy_brainstorm(params: LegacyBrainstormParams, client: GenerationService) -> str:
    # max_rounds is accepted and checked; one exchange round is performed
    require_range(params.max_rounds, "max_rounds", MIN_ROUNDS, MAX_ROUNDS)
    require_text(params.prompt, "Topic")
    require_text(params.claude_thoughts, "claude_thoughts")
    logger.info(f"Brainstorm (legacy): topic_len={len(params.prompt)}, max_rounds={params.max_rounds}")

    prompt = (
        f"Collaborative brainstorm on: {params.prompt}\n\n"
        f"Claude's thoughts: {params.claude_thoughts}\n\n"
        "Respond with your insights."
    )
    response = await client.generate_content(prompt, ModelVariant.PRO)
    return format_legacy_brainstorm(params.claude_thoughts, response.text)


@mcp_tool("gemini-brainstorm", slow_after=60.0)
async def handle_brainstorm(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Collaborative brainstorming seeded with Claude's thoughts"""
    params = LegacyBrainstormParams.model_validate(arguments)
    return text_response(await execute_legacy_brainstorm(params, get_generation_client()))
