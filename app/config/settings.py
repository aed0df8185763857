from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "documents"
    db_username: str = "documents"
    db_password: str = "secret"
    db_connect_timeout_seconds: int = 10
    db_pool_max_size: int = 10

    # Server-side ceiling. The upload form advertises 50 MiB; the server enforces 10 MiB.
    max_file_size_bytes: int = 10 * 1024 * 1024

    google_service_account_email: str = ""
    google_service_account_private_key: str = ""
    google_project_id: str = ""
    google_drive_folder_id: str = ""
    google_drive_timeout_seconds: int = 30

    enrichment_enabled: bool = False
    enrichment_provider: str = "gemini"
    enrichment_temperature: float = 0.2
    enrichment_max_input_chars: int = 30000

    enrichment_gemini_api_key: str = ""
    enrichment_gemini_model_name: str = "gemini-2.0-flash"
    enrichment_gemini_timeout_seconds: int = 60

    enrichment_openai_api_key: str = ""
    enrichment_openai_model_name: str = ""
    enrichment_openai_timeout_seconds: int = 30

    enrichment_openai_compatible_api_key: str = ""
    enrichment_openai_compatible_model_name: str = ""
    enrichment_openai_compatible_base_url: str = ""
    enrichment_openai_compatible_timeout_seconds: int = 30

    retry_max_attempts: int = 3
    retry_wait_multiplier_seconds: float = 1.0
    retry_wait_max_seconds: float = 8.0

    query_statement_timeout_ms: int = 5000
    query_max_rows: int = 1000
