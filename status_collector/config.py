from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    base_path: str = "/status"  # list endpoint is served at <base_path>-list

    # Collectors file (absolute or relative to CWD)
    collectors_file: str = "collectors.yaml"

    # Response code when at least one collector did not succeed
    failure_status_code: int = 503

    # Logging
    log_level: str = "INFO"


settings = Settings()
