# Standard library imports
import os
from typing import Final, List, Optional
from dotenv import load_dotenv


class Settings:
    """
    Application settings loaded from environment variables.

    Centralizes configuration for storage, concepts and the HTTP layer.
    Every value can be overridden from the environment or a ``.env`` file.
    """

    def __init__(self) -> None:
        # Load environment variables from .env file
        load_dotenv()

        # Timezone used for document timestamps ("UTC", "Europe/Berlin", ...)
        self.timezone: Final[str] = os.getenv("TIMEZONE", "UTC")

        # Logging
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()

        # Storage Configuration
        # "mongo" talks to MONGO_URI, "memory" keeps everything in-process
        self.storage_backend: Final[str] = os.getenv("STORAGE_BACKEND", "mongo").lower()
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("DB_NAME", "social_concepts")

        # Collection Names (one per concept)
        self.users_collection: Final[str] = os.getenv("USERS_COLLECTION", "users")
        self.sessions_collection: Final[str] = os.getenv("SESSIONS_COLLECTION", "sessions")
        self.posts_collection: Final[str] = os.getenv("POSTS_COLLECTION", "posts")
        self.friends_collection: Final[str] = os.getenv("FRIENDS_COLLECTION", "friends")
        self.communities_collection: Final[str] = os.getenv("COMMUNITIES_COLLECTION", "communities")
        self.favorites_collection: Final[str] = os.getenv("FAVORITES_COLLECTION", "favorites")
        self.feeds_collection: Final[str] = os.getenv("FEEDS_COLLECTION", "feeds")
        self.features_collection: Final[str] = os.getenv("FEATURES_COLLECTION", "features")

        # Featuring: attention an item needs before it can be promoted
        self.minimum_attention: Final[int] = int(os.getenv("MINIMUM_ATTENTION", "10"))

        # HTTP Configuration
        self.session_cookie_name: Final[str] = os.getenv("SESSION_COOKIE_NAME", "sid")
        self.cors_origins: Final[List[str]] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
