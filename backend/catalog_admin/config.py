from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    DATABASE_URL: str = "sqlite:///./dev.db"
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    SEED_REFERENCE_DATA: bool = True
    LOG_LEVEL: str = "INFO"

    # variant engine guards
    MAX_VARIANT_COMBINATIONS: int = 1000
    TRANSACTION_TIMEOUT_SECONDS: Optional[float] = 30.0

    # media collaborator: "mock" or "imagekit"
    MEDIA_BACKEND: str = "mock"
    MEDIA_DEFAULT_FOLDER: str = "products"
    MEDIA_REQUEST_TIMEOUT_SECONDS: float = 15.0
    IMAGEKIT_PUBLIC_KEY: str = ""
    IMAGEKIT_PRIVATE_KEY: str = ""
    IMAGEKIT_URL_ENDPOINT: str = ""


settings = Settings()
