from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Lab Device Hub"
    api_prefix: str = "/api"

    # Logging
    log_level: str = "INFO"
    log_file: str = Field(default="labhub.log")  # "" disables the file handler
    log_max_bytes: int = 2_000_000
    log_backup_count: int = 5

    # Browser dashboard + desktop shell origins
    cors_allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:1420",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:1420",
    ]
    # desktop shell sends no Origin header
    cors_allow_originless: bool = True

    # Number of synthetic results returned per /data request
    results_min_count: int = 5
    results_max_count: int = 10

    @model_validator(mode="after")
    def _check_results_range(self) -> "Settings":
        if self.results_min_count < 1:
            raise ValueError("results_min_count must be >= 1")
        if self.results_min_count > self.results_max_count:
            raise ValueError("results_min_count must not exceed results_max_count")
        return self


settings = Settings()
