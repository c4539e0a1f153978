# app/core/config.py
import os
from typing import ClassVar, List
from pydantic import BaseModel, Field

from dotenv import load_dotenv

load_dotenv()

def _default_database_url() -> str:
    if os.getenv("DATABASE_URL"):
        return os.environ["DATABASE_URL"]
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return f"sqlite:///{os.path.join(data_dir, 'students.db')}"

def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")

class Settings(BaseModel):
    # Constante (não vira campo Pydantic)
    DATA_DIR: ClassVar[str] = os.path.abspath(os.getenv("DATA_DIR", "./data"))

    DATABASE_URL: str = Field(default_factory=_default_database_url)
    UPLOAD_DIR: str = Field(default_factory=lambda: os.path.abspath(os.getenv("UPLOAD_DIR", "./uploads")))
    PUBLIC_BASE_URL: str = Field(default_factory=lambda: os.getenv("PUBLIC_BASE_URL", "").rstrip("/"))

    JWT_SECRET: str = Field(default_factory=lambda: os.getenv("JWT_SECRET", "CHANGE_ME_SUPER_SECRET"))
    JWT_ALGORITHM: str = Field(default_factory=lambda: os.getenv("JWT_ALGORITHM", "HS256"))
    JWT_AUDIENCE: str = Field(default_factory=lambda: os.getenv("JWT_AUDIENCE", ""))
    JWT_ISSUER: str = Field(default_factory=lambda: os.getenv("JWT_ISSUER", ""))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")))

    WEBP_QUALITY: int = Field(default_factory=lambda: int(os.getenv("WEBP_QUALITY", "80")))
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    )
    RUN_MIGRATIONS: bool = Field(default_factory=lambda: _env_bool("RUN_MIGRATIONS", "true"))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

settings = Settings()
