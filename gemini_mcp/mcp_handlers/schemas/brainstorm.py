from typing import Optional
from pydantic import BaseModel, Field

from .mixins import GenerationOptionsMixin


class BrainstormParams(GenerationOptionsMixin):
    """
    Idea generation with consensus theme extraction (v2).
    """
    prompt: str = Field(description="The topic or problem to brainstorm about")
    num_ideas: int = Field(
        default=10,
        strict=True,
        description="Number of ideas to generate (1-50)"
    )
    constraints: Optional[str] = Field(
        default=None,
        description="Optional constraints or context for brainstorming"
    )
    extract_consensus: bool = Field(
        default=True,
        description="Extract consensus themes from generated ideas"
    )


class LegacyBrainstormParams(BaseModel):
    """
    Collaborative brainstorm seeded with Claude's thoughts (v1).
    """
    prompt: str = Field(description="The topic to brainstorm")
    claude_thoughts: str = Field(description="Claude's initial thoughts on the topic")
    max_rounds: int = Field(
        default=3,
        strict=True,
        description="Maximum exchange rounds (1-10)"
    )
