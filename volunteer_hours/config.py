"""Application configuration settings."""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Database Configuration
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "sqlite"
    db_password: str = ""
    db_name: str = "volunteer_hours"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    
    # Every storage call is bounded by this many seconds
    request_timeout_seconds: int = 8
    
    # Hour accounting
    default_hour_goal: int = 150
    allow_log_re_review: bool = False
    
    # Application Settings
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api"
    
    # CORS Settings
    cors_origins: List[str] = []
    
    class Config:
        env_file = ".env"
        case_sensitive = False
    
    @property
    def database_url(self) -> str:
        """Construct database URL from configuration."""
        # Use SQLite if DB_USER is 'sqlite'
        if self.db_user.lower() == 'sqlite':
            return f"sqlite:///./{self.db_name}.db"
        return f"mysql+pymysql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"
    
    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


# Global settings instance
settings = Settings()
