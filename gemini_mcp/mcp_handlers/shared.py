"""
Shared context for MCP handlers.

The server installs the Generation Service client once at startup; handlers
read it through get_generation_client().
"""

from typing import Optional, Protocol

from gemini_mcp.errors import ConfigError
from gemini_mcp.gemini_client import GenerationConfig, GenerationResponse, ModelVariant


class GenerationService(Protocol):
    def model_name(self, variant: ModelVariant) -> str: ...

    async def generate_content(
        self,
        prompt: str,
        model: ModelVariant = ModelVariant.PRO,
        config: Optional[GenerationConfig] = None,
    ) -> GenerationResponse: ...


generation_client: Optional[GenerationService] = None


def initialize_context(client: Optional[GenerationService]) -> None:
    """Install (or clear, with None) the client used by every handler"""
    global generation_client
    generation_client = client


def get_generation_client() -> GenerationService:
    if generation_client is None:
        raise ConfigError("Generation client not initialized")
    return generation_client
