"""
Analyze tool handlers: legacy code/text analysis (v1) and the unified
analyzer (v2).

The v2 analyzer dispatches on analyzer_type.type; each analyzer has its own
prompt and its own result model, tagged with the same "type" value.
"""

from typing import Dict, Any, List, Literal, Optional, Sequence, Union

from mcp.types import TextContent
from pydantic import BaseModel

from gemini_mcp.extraction import (
    CodeIssue,
    Emotion,
    extract_emotions,
    extract_field,
    extract_issues,
    extract_list,
    extract_score,
)
from gemini_mcp.gemini_client import ModelVariant
from gemini_mcp.logging_utils import get_logger
from .decorators import mcp_tool
from .schemas.analyze import AnalyzeCodeParams, AnalyzeParams, AnalyzeTextParams
from .shared import GenerationService, get_generation_client
from .types import ResponseMetadata, ToolResponse, build_generation_config, resolve_model
from .utils import json_response, require_text, text_response

logger = get_logger(__name__)

CODE_FOCUS_INSTRUCTIONS = {
    "quality": "Focus on code quality, readability, and best practices.",
    "security": "Focus on security vulnerabilities and potential exploits.",
    "performance": "Focus on performance optimizations and bottlenecks.",
    "bugs": "Focus on identifying bugs and logical errors.",
    "general": "Provide a general comprehensive analysis.",
}

DETAIL_INSTRUCTIONS = {
    "brief": "Keep the analysis brief: one short line per item.",
    "standard": "",
    "comprehensive": "Be comprehensive: explain each item and give examples where useful.",
}


# ============================================================================
# Result models
# ============================================================================

class TextAnalysis(BaseModel):
    type: Literal["text"] = "text"
    sentiment: str
    themes: List[str]
    tone: str
    key_points: List[str]


class CodeAnalysis(BaseModel):
    type: Literal["code"] = "code"
    quality_score: float
    issues: List[CodeIssue]
    patterns: List[str]
    complexity: str
    suggestions: List[str]


class DocumentAnalysis(BaseModel):
    type: Literal["document"] = "document"
    structure: str
    readability_score: float
    sections: List[str]
    key_points: List[str]


class SentimentAnalysis(BaseModel):
    type: Literal["sentiment"] = "sentiment"
    overall_sentiment: str
    confidence: float
    emotions: List[Emotion]


class ComparisonAnalysis(BaseModel):
    type: Literal["comparison"] = "comparison"
    similarities: List[str]
    differences: List[str]
    verdict: str


# Each variant carries its "type" tag in the serialized result
AnalyzeResult = Union[TextAnalysis, CodeAnalysis, DocumentAnalysis, SentimentAnalysis, ComparisonAnalysis]


# ============================================================================
# v1: gemini-analyze-code / gemini-analyze-text
# ============================================================================

def build_code_prompt(code: str, language: Optional[str], focus: str) -> str:
    lang_info = f"Language: {language}\n" if language else ""
    instruction = CODE_FOCUS_INSTRUCTIONS.get(focus, CODE_FOCUS_INSTRUCTIONS["general"])
    return f"Analyze the following code:\n\n{lang_info}```\n{code}\n```\n\n{instruction}"


def build_text_prompt(text: str, focus: Optional[str]) -> str:
    focus_instruction = f"\n\nFocus on: {focus}" if focus else ""
    return f"Analyze the following text:{focus_instruction}\n\n{text}"


async def execute_analyze_code(params: AnalyzeCodeParams, client: GenerationService) -> str:
    logger.info(
        f"Analyze code (legacy): language={params.language}, focus={params.focus}, "
        f"code_len={len(params.code)}"
    )
    require_text(params.code, "Code")
    prompt = build_code_prompt(params.code, params.language, params.focus)
    response = await client.generate_content(prompt, ModelVariant.PRO)
    logger.debug(f"Analyze code (legacy): analysis_len={len(response.text)}")
    return response.text


async def execute_analyze_text(params: AnalyzeTextParams, client: GenerationService) -> str:
    logger.info(f"Analyze text (legacy): focus={params.focus}, text_len={len(params.text)}")
    require_text(params.text, "Text")
    prompt = build_text_prompt(params.text, params.focus)
    response = await client.generate_content(prompt, ModelVariant.PRO)
    logger.debug(f"Analyze text (legacy): analysis_len={len(response.text)}")
    return response.text


@mcp_tool("gemini-analyze-code", slow_after=60.0)
async def handle_analyze_code(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Analyze code for quality, security, performance, or bugs"""
    params = AnalyzeCodeParams.model_validate(arguments)
    return text_response(await execute_analyze_code(params, get_generation_client()))


@mcp_tool("gemini-analyze-text", slow_after=60.0)
async def handle_analyze_text(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Analyze text with an optional focus"""
    params = AnalyzeTextParams.model_validate(arguments)
    return text_response(await execute_analyze_text(params, get_generation_client()))


# ============================================================================
# v2: gemini-analyze-v2
# ============================================================================

def _option_suffix(params: AnalyzeParams) -> str:
    """Focus areas and detail-level instruction appended to the deliverables."""
    options = params.options
    if options is None:
        return ""
    suffix = ""
    if options.focus_areas:
        suffix += f"\nFocus on: {', '.join(options.focus_areas)}"
    detail = DETAIL_INSTRUCTIONS[options.detail_level]
    if detail:
        suffix += f"\n{detail}"
    return suffix


def build_analyzer_prompt(params: AnalyzeParams) -> str:
    analyzer = params.analyzer_type
    suffix = _option_suffix(params)
    content = params.content

    if analyzer.type == "text":
        return (
            "Analyze the following text and provide:\n"
            "1. Overall sentiment (positive, negative, neutral, mixed)\n"
            "2. Main themes (3-5 themes)\n"
            "3. Tone (formal, informal, technical, conversational, etc.)\n"
            f"4. Key points (3-5 bullet points){suffix}\n\n"
            f"Text:\n{content}\n\n"
            "Provide analysis in a structured format."
        )
    if analyzer.type == "code":
        language = analyzer.params.language if analyzer.params else None
        lang_info = f"Language: {language}\n" if language else ""
        return (
            "Analyze this code and provide:\n"
            "1. Quality score (0-10)\n"
            "2. List of issues with severity (critical/high/medium/low) and category\n"
            "3. Design patterns used\n"
            "4. Complexity assessment\n"
            f"5. Improvement suggestions{suffix}\n\n"
            f"{lang_info}```\n{content}\n```\n\n"
            "Be specific and actionable."
        )
    if analyzer.type == "document":
        return (
            "Analyze this document's structure and readability:\n"
            "1. Overall structure (how it's organized)\n"
            "2. Readability score (0-10, where 10 is most readable)\n"
            "3. Main sections\n"
            f"4. Key points{suffix}\n\n"
            f"Document:\n{content}\n\n"
            "Provide structured analysis."
        )
    if analyzer.type == "sentiment":
        return (
            "Perform detailed sentiment analysis:\n"
            "1. Overall sentiment (very negative, negative, neutral, positive, very positive)\n"
            "2. Confidence level (0-1)\n"
            "3. Detected emotions with intensity (0-1): joy, sadness, anger, fear, surprise, etc."
            f"{suffix}\n\n"
            f"Text:\n{content}\n\n"
            "Be precise and nuanced."
        )
    # comparison
    return (
        "Compare these two texts:\n\n"
        f"Text A:\n{content}\n\n"
        f"Text B:\n{analyzer.params.compare_with}\n\n"
        "Provide:\n"
        "1. Key similarities\n"
        "2. Key differences\n"
        f"3. Overall verdict on how similar they are{suffix}"
    )


def parse_analysis(analyzer_type: str, text: str) -> BaseModel:
    """Build the analyzer's result model from the raw reply."""
    if analyzer_type == "text":
        return TextAnalysis(
            sentiment=extract_field(text, "sentiment", "neutral"),
            themes=extract_list(text, "theme"),
            tone=extract_field(text, "tone", "neutral"),
            key_points=extract_list(text, "key point"),
        )
    if analyzer_type == "code":
        return CodeAnalysis(
            quality_score=extract_score(text, 5.0),
            issues=extract_issues(text),
            patterns=extract_list(text, "pattern"),
            complexity=extract_field(text, "complexity", "moderate"),
            suggestions=extract_list(text, "suggestion"),
        )
    if analyzer_type == "document":
        return DocumentAnalysis(
            structure=extract_field(text, "structure", "linear"),
            readability_score=extract_score(text, 7.0),
            sections=extract_list(text, "section"),
            key_points=extract_list(text, "key point"),
        )
    if analyzer_type == "sentiment":
        return SentimentAnalysis(
            overall_sentiment=extract_field(text, "sentiment", "neutral"),
            confidence=extract_score(text, 0.5),
            emotions=extract_emotions(text),
        )
    if analyzer_type == "comparison":
        return ComparisonAnalysis(
            similarities=extract_list(text, "similar"),
            differences=extract_list(text, "differ"),
            verdict=extract_field(text, "verdict", "moderately similar"),
        )
    raise ValueError(f"Unknown analyzer type: {analyzer_type}")


async def execute_analyze(params: AnalyzeParams, client: GenerationService) -> ToolResponse[AnalyzeResult]:
    analyzer_type = params.analyzer_type.type
    logger.info(f"Analyze v2: type={analyzer_type}, content_len={len(params.content)}")
    require_text(params.content, "Content")

    model = resolve_model(params.model)
    config = build_generation_config(params.params)
    logger.debug(f"Running {analyzer_type} analyzer")
    response = await client.generate_content(build_analyzer_prompt(params), model, config)

    return ToolResponse[AnalyzeResult](
        result=parse_analysis(analyzer_type, response.text),
        metadata=ResponseMetadata.with_usage(response.model, response.usage),
    )


@mcp_tool("gemini-analyze-v2", slow_after=60.0)
async def handle_analyze_v2(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Unified analyzer: text, code, document, sentiment, comparison"""
    params = AnalyzeParams.model_validate(arguments)
    response = await execute_analyze(params, get_generation_client())
    return json_response(response)
