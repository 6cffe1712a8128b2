from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    URL_DATABASE_SQL: str
    URL_DATABASE_REDIS: str | None = None
    DB_POOL_TIMEOUT: int = 10
    DB_STATEMENT_TIMEOUT_MS: int = 5000

    # Secreto compartido con el proveedor de identidad (tokens HS256)
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"

    DISCORD_WEBHOOK_URL: str | None = None
    LOG_DIR: str | None = None

    PAIRING_CODE_LENGTH: int = 8
    PAIRING_MAX_ATTEMPTS: int = 5
    RELAY_DEFAULT_INTERVAL: str = "30s"
    RELAY_PAIRING_DEFAULT_INTERVAL: str = "10m"


    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
