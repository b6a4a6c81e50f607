from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Backend
    api_base_url: str = "http://localhost:8080"
    request_timeout_seconds: float = 30.0

    # Lists
    page_size: int = 20
    search_debounce_ms: int = 500  # quiescence window before a search fires

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "POLIS_",
        "extra": "ignore",
    }


settings = Settings()
