"""
Tool Schema Definitions

Single source of truth for the MCP tool catalog served by tools/list.
The catalog is built once at import and never changes afterwards; order is
the order clients see.
"""

from typing import Any, Dict, List, Tuple

from mcp.types import Tool

# Shared fragments for the v2 tools
_MODEL_PROPERTY: Dict[str, Any] = {
    "type": "string",
    "enum": ["pro", "flash"],
    "description": "Model preference: 'pro' (quality, default) or 'flash' (fast)",
}

_PARAMS_PROPERTY: Dict[str, Any] = {
    "type": "object",
    "description": "Generation parameters; unset values fall back to the tool's defaults",
    "properties": {
        "temperature": {"type": "number", "description": "Temperature for generation (0.0-2.0)"},
        "max_tokens": {"type": "integer", "description": "Maximum tokens in response"},
        "top_p": {"type": "number", "description": "Top-p (nucleus) sampling parameter"},
        "top_k": {"type": "integer", "description": "Top-k sampling parameter"},
    },
}

_METADATA_RETURNS = """  "metadata": {
    "model_used": "string",
    "prompt_tokens": int,
    "response_tokens": int,
    "total_tokens": int
  }"""


_TOOLS: Tuple[Tool, ...] = (
    # ------------------------------------------------------------------
    # v1 tools: plain-text results
    # ------------------------------------------------------------------
    Tool(
        name="gemini-query",
        description="""Send direct queries to Gemini models.

USE CASES:
- Ask Gemini a question directly
- Get a second opinion from a different model

RETURNS:
The model's reply as plain text.

EXAMPLE REQUEST:
{"prompt": "Explain the CAP theorem in two sentences", "model": "flash"}""",
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {"type": "string", "description": "The prompt to send"},
                "model": {"type": "string", "enum": ["pro", "flash"], "default": "pro"},
                "temperature": {"type": "number"},
                "max_output_tokens": {"type": "integer"},
            },
            "required": ["prompt"],
        },
    ),
    Tool(
        name="gemini-analyze-code",
        description="""Analyze code.

USE CASES:
- Review a snippet for quality, security, performance or bugs

RETURNS:
The analysis as plain text.""",
        inputSchema={
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "The code to analyze"},
                "language": {"type": "string"},
                "focus": {
                    "type": "string",
                    "enum": ["general", "quality", "security", "performance", "bugs"],
                    "default": "general",
                },
            },
            "required": ["code"],
        },
    ),
    Tool(
        name="gemini-analyze-text",
        description="""Analyze text.

RETURNS:
The analysis as plain text.""",
        inputSchema={
            "type": "object",
            "properties": {
                "text": {"type": "string", "description": "The text to analyze"},
                "focus": {"type": "string"},
            },
            "required": ["text"],
        },
    ),
    Tool(
        name="gemini-summarize",
        description="""Summarize content.

RETURNS:
The summary as plain text. For word count and key topics use gemini-summarize-v2.""",
        inputSchema={
            "type": "object",
            "properties": {
                "content": {"type": "string", "description": "The text content to summarize"},
                "detail_level": {
                    "type": "string",
                    "enum": ["brief", "moderate", "detailed"],
                    "default": "moderate",
                },
                "format": {
                    "type": "string",
                    "enum": ["bullets", "paragraphs", "outline"],
                    "default": "paragraphs",
                },
            },
            "required": ["content"],
        },
    ),
    Tool(
        name="gemini-brainstorm",
        description="""Collaborative brainstorming.

Claude shares its initial thoughts; Gemini responds with its own insights.

RETURNS:
Markdown text with a "# Synthesis" section and a "# Conversation History" section.""",
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {"type": "string", "description": "The topic to brainstorm"},
                "claude_thoughts": {"type": "string", "description": "Claude's initial thoughts"},
                "max_rounds": {"type": "integer", "default": 3, "minimum": 1, "maximum": 10},
            },
            "required": ["prompt", "claude_thoughts"],
        },
    ),
    # ------------------------------------------------------------------
    # v2 tools: JSON results with usage metadata
    # ------------------------------------------------------------------
    Tool(
        name="gemini-search-v2",
        description=f"""Multi-source semantic search with citations and ranking.

USE CASES:
- Answer a question from a set of documents
- Find which sources are relevant to a query
- Pull verbatim quotes that support an answer

RETURNS:
{{
  "result": {{
    "answer": "string",
    "results": [{{"source_id": "string", "source_title": "string", "excerpt": "string", "relevance_score": float}}],
    "citations": [{{"source_id": "string", "source_title": "string", "quote": "string"}}]
  }},
{_METADATA_RETURNS}
}}

EXAMPLE REQUEST:
{{
  "query": "How do the reports describe latency?",
  "sources": [{{"id": "r1", "title": "Q3 Report", "content": "..."}}],
  "filters": {{"max_results": 3}}
}}""",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "The search query"},
                "sources": {
                    "type": "array",
                    "description": "Sources to search across",
                    "items": {
                        "type": "object",
                        "properties": {
                            "id": {"type": "string"},
                            "title": {"type": "string"},
                            "content": {"type": "string"},
                        },
                        "required": ["id", "title", "content"],
                    },
                },
                "filters": {
                    "type": "object",
                    "properties": {
                        "source_ids": {"type": "array", "items": {"type": "string"}},
                        "min_relevance": {"type": "number"},
                        "max_results": {"type": "integer"},
                    },
                },
                "ranking": {
                    "type": "string",
                    "enum": ["relevance", "recency", "popularity"],
                    "default": "relevance",
                },
                "include_citations": {"type": "boolean", "default": True},
                "model": _MODEL_PROPERTY,
                "params": _PARAMS_PROPERTY,
            },
            "required": ["query", "sources"],
        },
    ),
    Tool(
        name="gemini-analyze-v2",
        description=f"""Unified analyzer with 5 types: text, code, document, sentiment, comparison.

USE CASES:
- text: sentiment, themes, tone, key points
- code: quality score, issues, patterns, complexity, suggestions
- document: structure, readability score, sections, key points
- sentiment: overall sentiment, confidence, emotions
- comparison: similarities, differences, verdict (requires params.compare_with)

RETURNS:
{{
  "result": {{"type": "<analyzer type>", ...analyzer-specific fields}},
{_METADATA_RETURNS}
}}

EXAMPLE REQUEST:
{{"content": "def f(x): return x*2", "analyzer_type": {{"type": "code", "params": {{"language": "python"}}}}}}""",
        inputSchema={
            "type": "object",
            "properties": {
                "content": {"type": "string", "description": "The content to analyze"},
                "analyzer_type": {
                    "type": "object",
                    "description": "Type of analyzer to use",
                    "oneOf": [
                        {"type": "object", "properties": {"type": {"const": "text"}}, "required": ["type"]},
                        {
                            "type": "object",
                            "properties": {
                                "type": {"const": "code"},
                                "params": {"type": "object", "properties": {"language": {"type": "string"}}},
                            },
                            "required": ["type"],
                        },
                        {"type": "object", "properties": {"type": {"const": "document"}}, "required": ["type"]},
                        {"type": "object", "properties": {"type": {"const": "sentiment"}}, "required": ["type"]},
                        {
                            "type": "object",
                            "properties": {
                                "type": {"const": "comparison"},
                                "params": {
                                    "type": "object",
                                    "properties": {"compare_with": {"type": "string"}},
                                    "required": ["compare_with"],
                                },
                            },
                            "required": ["type", "params"],
                        },
                    ],
                },
                "options": {
                    "type": "object",
                    "properties": {
                        "focus_areas": {"type": "array", "items": {"type": "string"}},
                        "detail_level": {
                            "type": "string",
                            "enum": ["brief", "standard", "comprehensive"],
                            "default": "standard",
                        },
                    },
                },
                "model": _MODEL_PROPERTY,
                "params": _PARAMS_PROPERTY,
            },
            "required": ["content", "analyzer_type"],
        },
    ),
    Tool(
        name="gemini-summarize-v2",
        description=f"""Enhanced summarization with key topics extraction and word count.

Content is limited to 1,000,000 characters.

RETURNS:
{{
  "result": {{"summary": "string", "word_count": int, "key_topics": ["string"]}},
{_METADATA_RETURNS}
}}""",
        inputSchema={
            "type": "object",
            "properties": {
                "content": {"type": "string", "description": "The text content to summarize"},
                "length": {"type": "string", "enum": ["brief", "medium", "detailed"], "default": "medium"},
                "format": {
                    "type": "string",
                    "enum": ["paragraph", "bullet_points", "executive", "key_points"],
                    "default": "paragraph",
                },
                "focus": {"type": "string"},
                "model": _MODEL_PROPERTY,
                "params": _PARAMS_PROPERTY,
            },
            "required": ["content"],
        },
    ),
    Tool(
        name="gemini-brainstorm-v2",
        description=f"""Idea generation with consensus theme extraction.

Consensus themes are keywords shared by at least 30% of the generated ideas.

RETURNS:
{{
  "result": {{
    "ideas": [{{"id": int, "text": "string"}}],
    "consensus_themes": [{{"theme": "string", "frequency": int, "related_ideas": [int]}}] | null
  }},
{_METADATA_RETURNS}
}}

EXAMPLE REQUEST:
{{"prompt": "Ways to reduce meeting load", "num_ideas": 5, "constraints": "remote team"}}""",
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {"type": "string", "description": "The topic or problem to brainstorm"},
                "num_ideas": {"type": "integer", "default": 10, "minimum": 1, "maximum": 50},
                "constraints": {"type": "string"},
                "extract_consensus": {"type": "boolean", "default": True},
                "model": _MODEL_PROPERTY,
                "params": _PARAMS_PROPERTY,
            },
            "required": ["prompt"],
        },
    ),
)

_names = [tool.name for tool in _TOOLS]
if len(_names) != len(set(_names)):
    raise ValueError(f"Duplicate tool names in catalog: {_names}")
del _names


def get_tool_definitions() -> List[Tool]:
    """
    Get MCP tool definitions, in catalog order.

    Returns a fresh list; the Tool objects themselves are shared.
    """
    return list(_TOOLS)
