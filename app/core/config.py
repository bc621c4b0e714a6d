from functools import lru_cache
from typing import Literal
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "ShopReco"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Mongo
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "shopreco"
    MONGO_TLS: bool = False                    # Atlas / SRV deployments need the certifi bundle

    # Collections
    products_collection: str = "products"
    interactions_collection: str = "interactions"
    orders_collection: str = "orders"

    # Interaction retention (Mongo TTL index + read-side cutoff)
    interaction_ttl_days: int = 30

    # Upper bound on documents fetched by any single store read
    max_scan_docs: int = 5000

    # Default list sizes
    recommendations_limit: int = 6
    home_recommendations_limit: int = 8
    home_section_limit: int = 6                # trending + recently viewed
    category_suggestions_limit: int = 3
    bought_together_limit: int = 4

    # API
    api_prefix: str = ""
    ALLOWED_ORIGINS: str = ""                  # CSV

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
