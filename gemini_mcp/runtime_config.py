"""
Runtime Configuration Management

Server settings come from the environment so credentials and model names
can change without code changes or redeployment.
"""

from dataclasses import dataclass
from typing import Mapping, Optional
import os

from gemini_mcp.errors import ConfigError
from gemini_mcp.logging_utils import get_logger

logger = get_logger(__name__)


DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_PRO_MODEL = "gemini-3-pro-preview"
DEFAULT_FLASH_MODEL = "gemini-3-flash-preview"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class ServerConfig:
    """Settings for the Generation Service client and the server process"""
    api_key: str
    pro_model: str = DEFAULT_PRO_MODEL
    flash_model: str = DEFAULT_FLASH_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """
        Build config from environment variables.

        GEMINI_API_KEY is required. GEMINI_PRO_MODEL, GEMINI_FLASH_MODEL,
        GEMINI_API_BASE_URL, GEMINI_MCP_TIMEOUT and GEMINI_MCP_LOG_LEVEL
        are optional overrides.

        Raises:
            ConfigError: if GEMINI_API_KEY is missing or blank
        """
        env = os.environ if environ is None else environ

        api_key = (env.get("GEMINI_API_KEY") or "").strip()
        if not api_key:
            raise ConfigError("GEMINI_API_KEY environment variable required")

        return cls(
            api_key=api_key,
            pro_model=_env_str(env, "GEMINI_PRO_MODEL", DEFAULT_PRO_MODEL),
            flash_model=_env_str(env, "GEMINI_FLASH_MODEL", DEFAULT_FLASH_MODEL),
            base_url=_env_str(env, "GEMINI_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout=_env_timeout(env),
            log_level=_env_str(env, "GEMINI_MCP_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


def _env_str(env: Mapping[str, str], key: str, default: str) -> str:
    value = (env.get(key) or "").strip()
    return value or default


def _env_timeout(env: Mapping[str, str]) -> float:
    raw = (env.get("GEMINI_MCP_TIMEOUT") or "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid GEMINI_MCP_TIMEOUT={raw!r}, using {DEFAULT_TIMEOUT_SECONDS}s")
        return DEFAULT_TIMEOUT_SECONDS
    if timeout <= 0:
        logger.warning(f"GEMINI_MCP_TIMEOUT must be positive, using {DEFAULT_TIMEOUT_SECONDS}s")
        return DEFAULT_TIMEOUT_SECONDS
    return timeout
