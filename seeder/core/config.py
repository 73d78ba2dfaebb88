from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    PROJECT_NAME: str = "Content Seeder"
    DATABASE_URL: str = "sqlite:///seeder.db"
    DATASET_PATH: Path = PACKAGE_DIR / "data" / "products.json"
    MEDIA_DIR: Path = Path("media")
    DEFAULT_ITEMS: int = 100
    MAX_ITEMS: int = 10000  # size of the reference product dataset
    DEFAULT_USERS: int = 10
    DEFAULT_BATCH: int = 10  # products touched by sale/featured/stock commands
    IMAGE_TIMEOUT: float = 15.0
    FAKER_LOCALE: str = "en_US"
    FAKER_SEED: int | None = None
    PASSWORD_LENGTH: int = 12
    LOG_LEVEL: str = "WARNING"

    class Config:
        env_file = ".env"


settings = Settings()
