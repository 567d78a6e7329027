
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Banking Ledger API"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = Field(default="INFO", description="Root level for the banking_api loggers")
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
