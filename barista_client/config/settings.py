from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    environment: str = "dev"
    log_level: str = "INFO"
    barista_url: str = ""
    barista_key: str = ""
    barista_secret: str = ""
    barista_connect_timeout: float = 30.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
