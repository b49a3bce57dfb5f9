# academic_records/core/config.py
"""Application configuration using Pydantic."""
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    users_database_url: str
    profiles_database_url: str
    academic_database_url: str

    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'info'
    allowed_origins: List[str] = ['*']

    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    # Isolation for enrollment transactions
    enrollment_isolation_level: str = 'SERIALIZABLE'

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }

settings = Settings()
