"""
Gemini Generation Service client.

Thin async wrapper over the Gemini REST `generateContent` endpoint. Tools
hand it a prompt, a model variant and optional generation parameters and
get back the reply text plus token usage, or a GeminiError.

Usage:
    client = GeminiClient(ServerConfig.from_env())
    response = await client.generate_content("Hello", ModelVariant.FLASH)
    print(response.text, response.usage.total_token_count)
    await client.aclose()
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from gemini_mcp.errors import EmptyResponseError, GeminiApiError, GeminiHttpError
from gemini_mcp.logging_utils import get_logger
from gemini_mcp.runtime_config import ServerConfig

logger = get_logger(__name__)


class ModelVariant(str, Enum):
    """The two selectable backend configurations."""
    PRO = "pro"       # quality
    FLASH = "flash"   # fast

    @classmethod
    def from_str(cls, value: Optional[str]) -> "ModelVariant":
        """Lenient parse used by v1 tools: anything mentioning flash is FLASH."""
        if value and "flash" in value.lower():
            return cls.FLASH
        return cls.PRO


@dataclass
class GenerationConfig:
    """Sampling parameters; unset values are left to the backend."""
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None

    def to_request(self) -> Dict[str, Any]:
        payload = {
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
            "topP": self.top_p,
            "topK": self.top_k,
        }
        return {k: v for k, v in payload.items() if v is not None}


@dataclass
class UsageMetadata:
    prompt_token_count: int = 0
    candidates_token_count: int = 0
    total_token_count: int = 0

    @classmethod
    def from_response(cls, data: Optional[Dict[str, Any]]) -> "UsageMetadata":
        if not data:
            return cls()
        return cls(
            prompt_token_count=int(data.get("promptTokenCount", 0) or 0),
            candidates_token_count=int(data.get("candidatesTokenCount", 0) or 0),
            total_token_count=int(data.get("totalTokenCount", 0) or 0),
        )


@dataclass
class GenerationResponse:
    """What tools consume from one generate_content call."""
    text: str
    model: str
    usage: UsageMetadata = field(default_factory=UsageMetadata)


class GeminiClient:
    """Async client for the Gemini generateContent API."""

    def __init__(self, config: ServerConfig, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._http_client = http_client or httpx.AsyncClient(
            timeout=config.timeout,
            limits=httpx.Limits(max_keepalive_connections=10, keepalive_expiry=90.0),
        )
        logger.info("Gemini client initialized")
        logger.debug(f"Pro model: {config.pro_model}")
        logger.debug(f"Flash model: {config.flash_model}")

    def model_name(self, variant: ModelVariant) -> str:
        """Backend model id for a variant (environment overrides applied)."""
        if variant is ModelVariant.FLASH:
            return self.config.flash_model
        return self.config.pro_model

    async def generate_content(
        self,
        prompt: str,
        model: ModelVariant = ModelVariant.PRO,
        config: Optional[GenerationConfig] = None,
    ) -> GenerationResponse:
        """
        Run one prompt against the backend.

        Raises:
            GeminiHttpError: transport failure (connect, timeout, ...)
            GeminiApiError: non-200 status, message is the response body
            EmptyResponseError: 200 without a text part
        """
        model_name = self.model_name(model)
        request: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        if config is not None:
            generation_config = config.to_request()
            if generation_config:
                request["generationConfig"] = generation_config

        url = f"{self.config.base_url}/models/{model_name}:generateContent"
        logger.debug(f"Sending request to {model_name} (prompt_len={len(prompt)})")

        try:
            response = await self._http_client.post(
                url,
                params={"key": self.config.api_key},
                json=request,
            )
        except httpx.HTTPError as e:
            raise GeminiHttpError(str(e) or type(e).__name__) from e

        if response.status_code != 200:
            body = response.text or "Unknown error"
            raise GeminiApiError(response.status_code, body)

        try:
            data = response.json()
        except ValueError as e:
            raise GeminiApiError(response.status_code, f"Invalid JSON in response: {e}") from e
        if not isinstance(data, dict):
            raise GeminiApiError(response.status_code, "Unexpected response shape")

        usage = UsageMetadata.from_response(data.get("usageMetadata"))
        logger.debug(
            f"Tokens - prompt: {usage.prompt_token_count}, "
            f"response: {usage.candidates_token_count}, total: {usage.total_token_count}"
        )

        text = _first_text_part(data)
        if text is None:
            raise EmptyResponseError()

        return GenerationResponse(text=text, model=model_name, usage=usage)

    async def test_connection(self) -> None:
        """Send a trivial prompt; raises GeminiError when the backend is unusable."""
        logger.info("Testing connection to Gemini API...")
        await self.generate_content("Test", ModelVariant.PRO)
        logger.info("Connection test successful")

    async def aclose(self) -> None:
        await self._http_client.aclose()


def _first_text_part(data: Dict[str, Any]) -> Optional[str]:
    candidates = data.get("candidates") or []
    if not candidates:
        return None
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts:
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None
