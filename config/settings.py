from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Upstream Token API
    token_api_url: str = "https://token-api.thegraph.com"
    graph_api_key: str = ""  # X-Api-Key header, preferred over the token. NEVER LOG THIS
    graph_token: str = ""  # Bearer JWT, used only when no API key is set
    upstream_timeout_sec: float = 30.0

    # Client adapters -> proxy endpoint
    explorer_url: str = "http://localhost:8080"
    proxy_route: str = "/api/token-proxy"
    client_timeout_sec: float = 30.0
    default_network: str = "mainnet"

    # Proxy service
    api_host: str = "127.0.0.1"
    dashboard_port: int = 8080
    proxy_rate_limit: str = "120/minute"
    rate_limit_enabled: bool = True
    cors_origins: list[str] = ["http://localhost:3000"]
    api_debug: bool = False  # exposes /api/docs

    # Logging
    json_logs: bool = False


settings = Settings()
