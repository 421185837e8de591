# college_admin/core/config.py
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SECRET_KEY: str = "your-super-secret-jwt-key-change-in-prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days

    DATABASE_URL: str = "sqlite:///./college.db"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://127.0.0.1",
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Fee payments
    PAYMENT_AMOUNT_TOLERANCE: float = 0.01

    # Dashboard
    DASHBOARD_RECENT_LIMIT: int = 10
    DASHBOARD_TREND_MONTHS: int = 6
    DASHBOARD_TOP_COURSES: int = 5

    class Config:
        env_file = ".env"


# Single instance for the whole process
settings = Settings()
