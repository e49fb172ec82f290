"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "fintools-gateway"
    log_level: str = "INFO"

    # Card validator
    default_bin_length: int = 6
    bin_table_path: str | None = None  # None = packaged sample table

    # Mnemonic deriver
    wordlist_language: str = "english"
    mask_secrets: bool = True  # Private material is masked unless reveal is requested

    # HUB3 payment slip payload
    hub3_header: str = "HRVHUB30"
    hub3_currency: str = "EUR"
    hub3_default_purpose: str = "OTHR"


settings = Settings()
