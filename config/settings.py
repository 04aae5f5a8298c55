"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Deployment specific values (ledger endpoint, gateway, org codes)
    should be stored in the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Ledger history query (Fabric gateway REST bridge)
    trace_api_url: str = "http://localhost:3000/api/chicken/trace"
    trace_request_timeout: int = 30

    # Certificate documents are pinned on IPFS
    ipfs_gateway_url: str = "https://gateway.pinata.cloud/ipfs"

    # Organizations whose "received for processing" update is folded into
    # the following transformation event. Empty list disables folding.
    transitional_org_codes: List[str] = ["ProcessorMSP"]

    # Display name used when a record carries no identity fields
    identity_fallback_label: str = "Unaffiliated Participant"

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"
    debug: bool = False

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = ["http://localhost:3000"]


# Singleton instance
settings = Settings()
