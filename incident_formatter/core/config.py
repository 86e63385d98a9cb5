from typing import List, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_env: str = "dev"
    log_level: str = "INFO"
    cors_allow_origins: List[str] = ["*"]

    # optional JSON overlay {fieldConfig, sectionConfig} applied on top of the defaults
    field_config_file: Optional[str] = None

    ip_api_base_url: str = "http://ip-api.com"
    abuseipdb_base_url: str = "https://api.abuseipdb.com/api/v2"
    abuseipdb_api_key: Optional[str] = None
    abuseipdb_max_age_days: int = 90

    http_timeout_s: float = 10.0
    http_max_retries: int = 2

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
