"""
Pytest configuration and fixtures for gemini-mcp tests.
"""
import sys
from pathlib import Path
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gemini_mcp.gemini_client import GenerationResponse, ModelVariant, UsageMetadata
from gemini_mcp.mcp_handlers import shared


MODEL_NAMES = {
    ModelVariant.PRO: "gemini-test-pro",
    ModelVariant.FLASH: "gemini-test-flash",
}


def make_response(text: str, variant: ModelVariant = ModelVariant.PRO,
                  usage: Optional[UsageMetadata] = None) -> GenerationResponse:
    """A GenerationResponse as the real client would build it."""
    return GenerationResponse(
        text=text,
        model=MODEL_NAMES[variant],
        usage=usage or UsageMetadata(prompt_token_count=12, candidates_token_count=34, total_token_count=46),
    )


class FakeGenerationClient:
    """
    Stand-in for GeminiClient.

    generate_content is an AsyncMock so tests can assert on prompts, model
    variants and generation configs. Set `reply` to change the text returned.
    """

    def __init__(self, reply: str = "ok"):
        self.reply = reply
        self.generate_content = AsyncMock(side_effect=self._generate)
        self.model_name = MagicMock(side_effect=lambda variant: MODEL_NAMES[variant])

    async def _generate(self, prompt, model=ModelVariant.PRO, config=None):
        return make_response(self.reply, model)

    # Convenience accessors for the last call
    @property
    def last_prompt(self) -> str:
        return self.generate_content.call_args.args[0]

    @property
    def last_model(self) -> ModelVariant:
        args = self.generate_content.call_args.args
        return args[1] if len(args) > 1 else ModelVariant.PRO

    @property
    def last_config(self):
        args = self.generate_content.call_args.args
        return args[2] if len(args) > 2 else None


@pytest.fixture
def fake_client():
    """Install a FakeGenerationClient as the shared generation client."""
    client = FakeGenerationClient()
    shared.initialize_context(client)
    yield client
    shared.initialize_context(None)
