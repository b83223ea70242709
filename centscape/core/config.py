from pydantic_settings import SettingsConfigDict, BaseSettings
from typing import List


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server settings
    server_host: str = "0.0.0.0"
    server_port: int = 3000
    server_reload: bool = False

    # CORS settings
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8081"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["GET", "POST", "OPTIONS"]
    cors_allow_headers: List[str] = ["Content-Type", "Authorization", "X-Requested-With"]

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Cache settings
    cache_enabled: bool = True
    cache_maxsize: int = 100
    cache_ttl_seconds: int = 600  # 10 minutes default

    # Fetching settings
    fetch_timeout_ms: int = 15000
    fetch_user_agent: str = DEFAULT_USER_AGENT
    fetch_follow_redirects: bool = True
    # Permit fetching localhost and private network addresses
    allow_private_hosts: bool = False

    # Image proxy settings
    image_proxy_timeout_ms: int = 10000

    # Environment
    environment: str = "development"  # development, production
    api_version: str = "1.0.0"

    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env file if it exists
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields in env file
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


# Create a single instance of settings
settings = Settings()
