"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "benkon-quote"
    log_level: str = "INFO"

    # Quotation
    default_locale: str = "vi"
    quote_validity_days: int = 30
    quote_number_prefix: str = "QT"

    # Company block printed on exported quotations
    company_name: str = "BenKon Energy Efficiency Solutions"
    company_website: str = "www.benkon.io"
    company_email: str = "support@benkon.io"

    # Form defaults (VND)
    default_number_of_stores: int = 1
    default_hardware_cost: int = 6_500_000
    default_software_cost_per_year: int = 5_000_000
    default_installation_cost_per_store: int = 1_600_000
    default_setup_service_per_store: int = 1_200_000

    # Sessions with saved form state kept in memory before the oldest is dropped
    form_state_max_sessions: int = 10_000

    # PDF export: TTF font with Vietnamese glyphs, Helvetica when unset
    pdf_font_path: Optional[str] = None


settings = Settings()
