from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_ENV: str = "dev"
    DB_URL: str = "sqlite:///./kitchenpos.db"
    DB_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    # forward-only COOKING -> MEAL -> COMPLETION; off keeps only the COMPLETION gate
    ORDER_STATUS_STRICT: bool = False
    TZ: str = "UTC"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
