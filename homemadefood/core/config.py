from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- General ---
    PROJECT_NAME: str = "HomeMadeFood"
    LOG_LEVEL: str = "INFO"
    APP_URL: str = "https://homemadefood.app"
    TIMEZONE: str = "Asia/Karachi"

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./homemadefood.db"
    DATABASE_ECHO: bool = False
    DB_CONNECT_RETRIES: int = 10
    DB_CONNECT_WAIT_SECONDS: int = 3

    # --- Orders ---
    ORDER_ETA_MINUTES: int = 35
    # Off keeps the permissive admin override behaviour of status updates
    ENFORCE_ORDER_TRANSITIONS: bool = False

    # --- Meal suggestion providers (each one is used only when configured) ---
    OPENROUTER_API_KEY: str | None = None
    OPENROUTER_MODEL: str = "openai/gpt-3.5-turbo"
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-3.5-turbo"

    ANTHROPIC_API_KEY: str | None = None
    ANTHROPIC_MODEL: str = "claude-3-haiku-20240307"

    HUGGING_FACE_ENABLED: bool = True
    HUGGING_FACE_API_KEY: str | None = None
    HUGGING_FACE_MODEL_URL: str = "https://api-inference.huggingface.co/models/microsoft/DialoGPT-medium"

    AI_PROVIDER_TIMEOUT_SECONDS: float = 20.0
    MEAL_CANDIDATE_LIMIT: int = 50

    # --- Recipe sources ---
    SPOONACULAR_API_KEY: str | None = None
    EDAMAM_APP_ID: str | None = None
    EDAMAM_APP_KEY: str | None = None
    RECIPE_SOURCE_TIMEOUT_SECONDS: float = 10.0

    # --- Configuration ---
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # unknown variables in .env are ignored
    )

settings = Settings()
