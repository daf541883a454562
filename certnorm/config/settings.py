from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_file_size_bytes: int = 10 * 1024 * 1024

    auto_build_chain: bool = False
    chain_fetch_timeout_ms: int = 20_000
    chain_order: str = "intermediate_first"
    chain_fallback_intermediate_url: str = "http://aia.entrust.net/l1k-chain256.cer"
