"""
Identity Proctor Configuration Settings

All values come from the environment (or a local .env file):
- AWS Rekognition is the detection provider
- A DynamoDB table holds the enrolled identity profiles
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Configuration for the Identity Proctor service."""
    
    # API Settings
    APP_NAME: str = "Identity Proctor Service"
    DEBUG: bool = True
    PORT: int = 8002
    
    # AWS Settings
    REGION: str = "us-east-1"
    PROVIDER_ENDPOINT_URL: Optional[str] = None  # Rekognition override (localstack etc.)
    STORE_ENDPOINT_URL: Optional[str] = None  # DynamoDB override
    AWS_MAX_ATTEMPTS: int = 3
    AWS_CONNECT_TIMEOUT: float = 3.0
    AWS_READ_TIMEOUT: float = 10.0
    
    # Face collection / profile table
    COLLECTION_ID: str = "proctor-faces"
    FACES_TABLENAME: str = "proctor-faces"
    
    # Check Settings
    MIN_CONFIDENCE: float = 50.0  # labels, moderation and face match
    OBJECTS_OF_INTEREST_LABELS: str = "Mobile Phone,Cell Phone"
    CHECK_TIMEOUT_SECONDS: float = 10.0
    
    # Enrollment Settings
    ENROLL_ROLLBACK_ON_FAILURE: bool = True
    
    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "logs"
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
