"""
Configuration settings for the Evaluation Board Portal
Supports SQLite for local work and PostgreSQL in production
"""
from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from typing import List

load_dotenv()


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Evaluation Board Portal"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # Database (SQLite by default, PostgreSQL via psycopg2 in production)
    DATABASE_URL: str = "sqlite:///./evaluation_boards.db"

    # Test assignments
    TEST_ASSIGNMENT_EXPIRY_DAYS: int = 30
    ASSIGNMENT_SEQUENCE_NAME: str = "test_assignment"

    # Acting user when no X-User-Id header is sent
    SYSTEM_USER_ID: str = "system"
    ADMIN_ROLE: str = "admin"

    # Email Configuration (SMTP, or Resend when an API key is set)
    EMAIL_ENABLED: bool = False
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    RESEND_API_KEY: str = ""
    EMAIL_FROM: str = "hr@yourcompany.com"

    # Company Info
    COMPANY_NAME: str = "Your Company"
    PORTAL_URL: str = "http://localhost:3000"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        extra = "allow"


settings = Settings()
