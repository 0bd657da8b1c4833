from typing import Optional
from pydantic import BaseModel, Field

from gemini_mcp.gemini_client import ModelVariant


class GenerationParams(BaseModel):
    """Caller overrides for sampling; anything unset falls back to the tool default."""
    temperature: Optional[float] = Field(
        default=None,
        description="Temperature for generation (0.0-2.0)"
    )
    max_tokens: Optional[int] = Field(
        default=None,
        description="Maximum tokens in response"
    )
    top_p: Optional[float] = Field(
        default=None,
        description="Top-p (nucleus) sampling parameter"
    )
    top_k: Optional[int] = Field(
        default=None,
        description="Top-k sampling parameter"
    )


class GenerationOptionsMixin(BaseModel):
    """Common parameters for v2 tools: model variant and sampling overrides."""
    model: Optional[ModelVariant] = Field(
        default=None,
        description="Model preference: 'pro' (quality, default) or 'flash' (fast)."
    )
    params: Optional[GenerationParams] = Field(
        default=None,
        description="Generation parameters (temperature, max_tokens, top_p, top_k)."
    )
