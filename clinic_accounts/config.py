"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.
    
    Attributes:
        database_url: SQLAlchemy connection string for the record store
        secret_key: Secret key for JWT token signing (required at runtime)
        algorithm: Algorithm used for JWT encoding (typically HS256)
        access_token_expire_minutes: Session token validity window in minutes
        bcrypt_rounds: Work factor for password hashing
        
        # Bootstrap settings
        bootstrap_super_admin_email: Optional email for first super admin creation
        bootstrap_super_admin_password: Optional password for first super admin creation
        
        # Service settings
        cors_origins: Origins allowed by the CORS middleware
        log_level: Root logging level
    """
    # Database settings
    database_url: str = "sqlite:///./clinic_accounts.db"
    
    # JWT settings
    secret_key: Optional[str] = None
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Password hashing
    bcrypt_rounds: int = 12
    
    # Bootstrap super admin settings (optional - only used on first start)
    bootstrap_super_admin_email: Optional[str] = None
    bootstrap_super_admin_password: Optional[str] = None

    cors_origins: List[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
