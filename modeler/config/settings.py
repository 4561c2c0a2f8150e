from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # AWS (will read from uppercase env vars automatically)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "ap-northeast-2"
    dynamodb_endpoint_url: Optional[str] = None  # e.g. http://localhost:8000 for DynamoDB Local

    # S3 thumbnails
    s3_bucket_name: str = "tokkitang"
    s3_public_url: str = "https://static.tokkitang.com"

    # SES
    ses_sender_email: str = "service@tokkitang.com"

    # Session tokens
    jwt_secret: str = "CHANGE_ME_FOR_PROD"
    jwt_algorithm: str = "HS256"
    access_token_ttl_hours: int = 24

    # GitHub OAuth
    github_client_id: str = ""
    github_client_secret: str = ""
    github_redirect_url: str = "https://tokkitang.com/redirect/github"

    # Public URLs
    frontend_url: str = "https://tokkitang.com"
    api_base_url: str = "http://localhost:8080"

    # App
    app_name: str = "modeler-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "https://tokkitang.com,http://localhost:5173,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def aws_client_kwargs(self) -> dict:
        """Explicit credentials when configured, otherwise boto3's default chain."""
        kwargs = {"region_name": self.aws_region}
        if self.aws_access_key_id and self.aws_secret_access_key:
            kwargs["aws_access_key_id"] = self.aws_access_key_id
            kwargs["aws_secret_access_key"] = self.aws_secret_access_key
        return kwargs

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
