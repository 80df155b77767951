# app/adapters/configuration/config.py

from typing import Optional, List, Union
from logging import getLevelName
from pydantic import field_validator, ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"
    DEBUG: bool = False

    # Application
    APP_NAME: str = "RBAC REST API"
    API_PREFIX: str = "/api/v1"

    # Database
    DB_DRIVER: str = "asyncpg"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "rbac"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)
    DB_ECHO: bool = False

    # Auth
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    PASSWORD_CHANGE_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 10
    # True: role checks trust the role claim embedded in the token until it expires.
    # False: role checks use the role currently stored for the user.
    AUTHORIZE_WITH_TOKEN_ROLE: bool = True

    # Shared key-value store (rate limiting and response cache)
    STORE_BACKEND: str = "auto"  # "auto", "memory", "redis"
    REDIS_URL: Optional[str] = None

    # Rate limiting (requests per window, per client)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_AUTH: int = 20
    RATE_LIMIT_PRODUCTS: int = 50
    RATE_LIMIT_USERS: int = 30
    RATE_LIMIT_SWEEP_PROBABILITY: float = 0.01
    TRUST_FORWARDED_FOR: bool = False

    # Response cache
    CACHE_ENABLED: bool = True
    CACHE_TTL_SECONDS: int = 60

    # Requests
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    # Initial administrator (seeded at startup when username and password are set)
    ADMIN_USERNAME: Optional[str] = None
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return value

        data = info.data
        return (
            f"postgresql+{data.get('DB_DRIVER', 'asyncpg')}://"
            f"{data['POSTGRES_USER']}:{data['POSTGRES_PASSWORD']}"
            f"@{data['POSTGRES_HOST']}:{data['POSTGRES_PORT']}/{data['POSTGRES_DB']}"
        )

    @field_validator("CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """
        Se vier como string CSV (ex: 'a,b,c'), transforma em lista.
        Se vier já como lista ou JSON, retorna como está.
        """
        if isinstance(v, str) and not v.startswith("["):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return v
        raise ValueError(f"CORS_ORIGINS inválido: {v!r}")

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Garante que o valor é um nível válido do logging"""
        lvl = v.upper()
        getLevelName(lvl)  # valida
        return lvl

    @field_validator("STORE_BACKEND", mode="before")
    def validate_store_backend(cls, v: str) -> str:
        backend = str(v).strip().lower()
        if backend not in ("auto", "memory", "redis"):
            raise ValueError(f"STORE_BACKEND inválido: {v!r}")
        return backend

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
