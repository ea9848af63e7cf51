from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"

    llm_max_tokens: int = 2000

    # Lodging budget used when no member supplied both bounds (USD per night)
    default_lodging_budget_min: int = 50
    default_lodging_budget_max: int = 300

    # External budget suggestions are clamped into [low * baseline_min, high * baseline_max]
    budget_clamp_low: float = 0.8
    budget_clamp_high: float = 1.2

    # Flight search fan-out
    flight_search_max_dates: int = 5
    flight_search_max_options: int = 25

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True

    # CORS
    cors_origins: str = "http://localhost:3000"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
