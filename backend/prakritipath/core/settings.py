from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "PrakritiPath"
    DATABASE_URL: str = "sqlite:///./prakritipath.db"

    # Auth Config
    JWT_SECRET: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REVOCATION_BACKEND: Literal["memory", "database"] = "memory"

    # Security
    PASSWORD_PEPPER: str = ""

    # Frontend origins allowed by CORS
    CORS_ORIGINS: list[str] = ["https://prakritipath.onrender.com", "http://localhost:5500"]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
