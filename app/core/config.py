from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Catalog API"
    LOG_LEVEL: str = "INFO"

    # Listening port of the HTTP server
    PORT: int = 3000

    # Either a full SQLAlchemy URL or the discrete DB_* parts below
    DATABASE_URL: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "catalog"

    # Pool & timeouts
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_QUERY_TIMEOUT: int = 10 # seconds
    CREATE_TABLES: bool = True

    # Image proxy
    IMAGE_BASE_URL: str = "https://images.example.com"
    IMAGE_TIMEOUT: float = 10.0

    CORS_ORIGINS: List[str] = ["*"]

    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            return (
                f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            )
        return "sqlite:///./catalog.db"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
