"""
Configuration module for the dashboard backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # PostgreSQL connection (defaults match docker-compose.yaml)
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_PORT: int = int(os.getenv("POSTGRES_PORT", "5432"))
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "dashboard_db")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")

    # Connection pool bounds
    DB_POOL_MIN_SIZE: int = int(os.getenv("DB_POOL_MIN_SIZE", "1"))
    DB_POOL_MAX_SIZE: int = int(os.getenv("DB_POOL_MAX_SIZE", "10"))

    # Artificial latency on the revenue query (demo only, set to 0 to disable)
    REVENUE_FETCH_DELAY_SECONDS: float = float(
        os.getenv("REVENUE_FETCH_DELAY_SECONDS", "3")
    )

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings
    CORS_ORIGINS: List[str] = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000"
    ).split(",")

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing or inconsistent.
        """
        required_settings = {
            "POSTGRES_HOST": cls.POSTGRES_HOST,
            "POSTGRES_DB": cls.POSTGRES_DB,
            "POSTGRES_USER": cls.POSTGRES_USER,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

        if cls.DB_POOL_MIN_SIZE > cls.DB_POOL_MAX_SIZE:
            raise ValueError(
                f"DB_POOL_MIN_SIZE ({cls.DB_POOL_MIN_SIZE}) must not exceed "
                f"DB_POOL_MAX_SIZE ({cls.DB_POOL_MAX_SIZE})."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"Warning: {e}")
            print("   The app may not work correctly until you configure your .env file.")
        else:
            raise
