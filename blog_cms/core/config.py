from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "blog"
    DB_PASSWORD: str = "blog_password"
    DB_NAME: str = "blog_db"
    DEBUG: bool = False
    AUTO_CREATE_TABLES: bool = False  # Development only; use Alembic otherwise

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Listing
    DEFAULT_PAGE_SIZE: int = 50  # Applied when list criteria are supplied without a limit
    MAX_PAGE_SIZE: int = 100  # Upper bound accepted by the HTTP layer

    # URLs
    FRONTEND_URL: str = "http://localhost:3000"

    class Config:
        env_file = ".env"
        extra = "ignore"  # Allow extra fields in .env file

settings = Settings()
