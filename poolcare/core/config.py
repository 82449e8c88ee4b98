from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "PoolCare API"
    api_prefix: str = "/api/v1"
    database_url: str = "sqlite:///./poolcare.db"
    auto_create_tables: bool = False
    log_level: str = "INFO"

    jwt_secret_key: str = "change-me-in-env"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
