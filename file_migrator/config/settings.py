from pydantic_settings import BaseSettings, SettingsConfigDict

from file_migrator.errors import ConfigurationError


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "postgres"
    db_username: str = "postgres"
    db_password: str = ""
    db_sslmode: str = "require"

    origin_strategy: str = "answer_payload"
    origin_base_url: str = ""
    origin_api_key: str = ""
    origin_referer: str = ""
    origin_upload_hosts: str = ""
    origin_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )
    fetch_timeout_seconds: int = 30
    fetch_max_attempts: int = 1
    fetch_retry_backoff_seconds: float = 1.0
    default_content_type: str = "image/jpeg"

    storage_backend: str = "s3"
    storage_endpoint: str = ""
    storage_region: str = "us-east-1"
    storage_bucket: str = "offer-images"
    storage_access_key: str = ""
    storage_secret_key: str = ""
    storage_public_url_base: str = ""
    storage_local_root: str = "./storage"

    profile_aggregate_enabled: bool = False
    skip_duplicate_audit: bool = True

    def upload_hosts(self) -> list[str]:
        """Hosts besides the origin base URL that may receive the origin API key."""
        return [host.strip() for host in self.origin_upload_hosts.split(",") if host.strip()]

    def missing_required(self) -> list[str]:
        """Names of required values that are empty for the selected strategy/backend."""
        required = {
            "db_password": self.db_password,
            "origin_base_url": self.origin_base_url,
        }
        if self.origin_strategy.lower() == "index":
            required["origin_api_key"] = self.origin_api_key
        if self.storage_backend.lower() == "s3":
            required["storage_endpoint"] = self.storage_endpoint
            required["storage_access_key"] = self.storage_access_key
            required["storage_secret_key"] = self.storage_secret_key
        return [name for name, value in required.items() if not value.strip()]

    def validate_required(self) -> None:
        """Raise ConfigurationError naming every missing required value."""
        missing = self.missing_required()
        if missing:
            env_names = ", ".join(name.upper() for name in missing)
            raise ConfigurationError(f"Missing required configuration: {env_names}")
