import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


# Languages the editor integration registers the provider for
SUPPORTED_LANGUAGES = frozenset(
    {
        "python",
        "javascript",
        "typescript",
        "javascriptreact",
        "typescriptreact",
        "html",
        "css",
    }
)


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Model endpoint (Ollama chat API)
    model_endpoint: str = os.getenv("MODEL_ENDPOINT", "http://localhost:11434/api/chat")
    model_name: str = os.getenv("MODEL_NAME", "qwen2.5-coder:7b")
    request_timeout: float = float(os.getenv("MODEL_REQUEST_TIMEOUT", "30.0"))

    # Editor context
    context_radius: int = int(os.getenv("CONTEXT_RADIUS", "10"))
    debounce_ms: int = int(os.getenv("DEBOUNCE_MS", "100"))

    # Suggestion cache
    cache_ttl_ms: int = int(os.getenv("CACHE_TTL_MS", "2000"))  # 2 seconds
    cache_max_size: int = int(os.getenv("CACHE_MAX_SIZE", "50"))

    # Orchestration
    max_retries: int = int(os.getenv("MAX_RETRIES", "3"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.context_radius < 0:
            raise ValueError("CONTEXT_RADIUS must be >= 0")

        if self.debounce_ms < 0:
            raise ValueError("DEBOUNCE_MS must be >= 0")

        if self.cache_ttl_ms <= 0:
            raise ValueError("CACHE_TTL_MS must be > 0")

        if self.cache_max_size < 1:
            raise ValueError("CACHE_MAX_SIZE must be >= 1")

        if self.max_retries < 0:
            raise ValueError("MAX_RETRIES must be >= 0")

        if self.request_timeout <= 0:
            raise ValueError(f"MODEL_REQUEST_TIMEOUT must be positive, got {self.request_timeout}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
