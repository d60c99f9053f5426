"""
Library configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Identity store settings from environment variables."""
    
    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    identity_database: str = "identity_db"
    users_collection: str = "users"
    
    # Create the database, collection and indexes when a store is opened
    ensure_database_and_collection: bool = False
    
    # Logging
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
