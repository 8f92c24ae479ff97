# app/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from pathlib import Path
from functools import lru_cache

class Settings(BaseSettings):
    ENV: str = "development"
    DATA_DIR: Path = Path("data")  # where the CSV / XLSX table files live
    REVIEWS_FILE: str = "reviews.csv"

    # path prefix the storefront app proxy forwards to us
    PROXY_PREFIX: str = "/api/proxy"

    # tenant resolution
    SHOP_HEADER: str = "x-shopify-shop-domain"
    SHOP_HOST_SUFFIX: str = ".myshopify.com"

    REVIEWS_PAGE_SIZE: int = 50
    LOG_LEVEL: str = "INFO"

    # Example .env:
    # DATA_DIR=./data
    # REVIEWS_FILE=reviews.xlsx
    # PROXY_PREFIX=/apps/reviews

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()

settings = get_settings()
