from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "discovery"
    db_username: str = "discovery"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    corpus_backend: str = "postgres"
    correlation_enabled: bool = True

    search_user: str = ""
    default_page_size: int = 100
    default_grouping: str = "file_size"
    default_group_sort: str = "by_group_size"
    default_file_sort: str = "by_file_name"
