"""
Shared result types for tool handlers.

Every v2 tool answers with ToolResponse[<tool result>]: the typed result
plus the model that produced it and its token usage.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from gemini_mcp.gemini_client import GenerationConfig, ModelVariant, UsageMetadata
from .schemas.mixins import GenerationParams

ResultT = TypeVar("ResultT")


class ResponseMetadata(BaseModel):
    """Model info and token usage for one tool call"""
    model_used: str
    prompt_tokens: int = 0
    response_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def with_usage(cls, model: str, usage: UsageMetadata) -> "ResponseMetadata":
        return cls(
            model_used=model,
            prompt_tokens=usage.prompt_token_count,
            response_tokens=usage.candidates_token_count,
            total_tokens=usage.total_token_count,
        )


class ToolResponse(BaseModel, Generic[ResultT]):
    result: ResultT
    metadata: ResponseMetadata


def resolve_model(model: Optional[ModelVariant]) -> ModelVariant:
    """Caller's variant, or the quality variant when unspecified."""
    return model if model is not None else ModelVariant.PRO


def build_generation_config(
    params: Optional[GenerationParams],
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> GenerationConfig:
    """
    Merge caller overrides over a tool's defaults.

    Args:
        params: caller-supplied GenerationParams (may be None)
        temperature: tool default temperature
        max_tokens: tool default output budget
    """
    if params is None:
        return GenerationConfig(temperature=temperature, max_output_tokens=max_tokens)
    return GenerationConfig(
        temperature=params.temperature if params.temperature is not None else temperature,
        max_output_tokens=params.max_tokens if params.max_tokens is not None else max_tokens,
        top_p=params.top_p,
        top_k=params.top_k,
    )
