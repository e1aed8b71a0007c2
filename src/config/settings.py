"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources, in priority order:
#
#   1. Environment variables, e.g. ANTHROPIC_API_KEY=sk-ant-...
#   2. The .env file in the project root (local development only)
#
# Field ``blog_generation_secret`` maps to env var BLOG_GENERATION_SECRET.
#
# A Settings instance is built ONCE at process startup (src/main.py or the
# CLI) and passed into every provider and the pipeline.  Nothing else in
# the codebase reads os.environ.
#
# SECURITY: .env is never committed.  Empty strings mean "not configured".
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """nightsWriter application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Generation API ===
    # Anthropic is preferred when both keys are set; see main._build_llm_provider.
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoints (TogetherAI, Groq, ...)
    openai_text_model: str = ""
    llm_timeout_seconds: float = 120.0
    llm_max_tokens: int = 3000

    # === Trigger authentication ===
    # Empty = every trigger request is rejected.
    blog_generation_secret: str = ""

    # === Record store ===
    database_path: str = "data/nights.db"

    # === Page-cache invalidation ===
    # Empty URL = log-only revalidator (local development).
    revalidate_url: str = ""
    revalidate_secret: str = ""
    revalidate_timeout_seconds: float = 10.0

    # === Pipeline ===
    generation_batch_size: int = 1
    generation_max_batch_size: int = 10
    generation_delay_seconds: float = 0.0

    # === Site ===
    site_name: str = "BahrainNights"
    home_country: str = "bahrain"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_llm_providers(self) -> list[str]:
        """Return the LLM provider names that have non-empty API keys configured."""
        providers: list[str] = []
        if self.anthropic_api_key:
            providers.append("anthropic")
        if self.openai_api_key:
            providers.append("openai")
        return providers

    def clamp_batch_size(self, requested: int | None) -> int:
        """Return *requested* bounded to ``1..generation_max_batch_size``.

        ``None`` selects the configured default batch size.
        """
        size = self.generation_batch_size if requested is None else requested
        return max(1, min(size, self.generation_max_batch_size))
