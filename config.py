from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    APP_NAME: str = "FitPlanner"
    ENV: str = "development"

    # Local cache by default; a postgresql+asyncpg URL switches to the hosted store
    DATABASE_URL: str = "sqlite+aiosqlite:///./fitplanner.db"
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20

    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    RECOMMENDATION_TOP_N: int = 4
    SIMILAR_USER_COUNT: int = 3
    PLAN_RANDOM_SEED: Optional[int] = None

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
