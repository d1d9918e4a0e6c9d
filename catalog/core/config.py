from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # DB
    DATABASE_URL: str = "sqlite:///./catalog.db"
    SQL_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Catalog queries
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 200

    # Defaults filled into products when storage holds NULL
    DEFAULT_CURRENCY: str = "USD"
    DEFAULT_SOURCE_TYPE: str = "scraper"

    # Rollups
    RECOMPUTE_ROLLUPS_ON_INGEST: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
