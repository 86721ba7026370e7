from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FBGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime
    app_env: str = "development"

    # Facebook application credentials (used for app sessions and signed requests)
    app_id: str = ""
    app_secret: str = ""

    # Attach appsecret_proof to requests whose session knows the app secret
    use_appsecret_proof: bool = True

    # CA chain used when the system certificate store rejects graph.facebook.com.
    # Empty means the certifi bundle.
    ca_bundle_path: str = ""

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def log_level(self) -> str:
        return "INFO" if self.is_production else "DEBUG"


settings = Settings()

# ---------------------------------------------------------------------------
# SDK constants (not env-configurable, change in code)
# ---------------------------------------------------------------------------

# Version of this SDK, sent in the user agent
VERSION = "4.0.0"

# Graph API version used when a request does not name one
GRAPH_API_VERSION = "v2.0"

# Signed request algorithm
SIGNED_REQUEST_ALGORITHM = "HMAC-SHA256"

# Graph API URL
BASE_GRAPH_URL = "https://graph.facebook.com"

USER_AGENT = f"fb-php-{VERSION}"

# HTTP timeouts (seconds)
CONNECT_TIMEOUT = 10.0
REQUEST_TIMEOUT = 60.0
