from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://escrow:escrow@db:5432/wordle_escrow"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://wordle.example.com,https://api.example.com"
    CORS_ORIGINS: str = "*"

    # Escrow release: results unlock once the whole roster has submitted
    # or the wall clock in REVEAL_TIMEZONE reaches REVEAL_CUTOFF_HOUR.
    REVEAL_TIMEZONE: str = "America/Chicago"
    REVEAL_CUTOFF_HOUR: int = 13
    MAX_ROSTER_SIZE: int = 10

    # External services
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    GIPHY_API_KEY: str = ""
    GIPHY_API_BASE: str = "https://api.giphy.com/v1"
    HTTP_TIMEOUT: float = 15.0

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
