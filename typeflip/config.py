"""Configuration settings for the typeflip service"""
import logging
from pydantic_settings import BaseSettings
from typing import List, Literal

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings.
    
    Priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values
    """
    
    # Service Identity
    SERVICE_NAME: str = "typeflip"
    SERVICE_HOST: str = "0.0.0.0"
    SERVICE_PORT: int = 5002
    
    # Logging
    LOG_LEVEL: str = "INFO"
    
    # Translation
    # Else value for an if without else and without a trailing return
    BOTTOM_SENTINEL: str = "never"
    INDENT_SIZE: int = 2
    # Mode used by the HTTP surface and preview sessions when a request does not pick one
    DEFAULT_MODE: Literal["strict", "tolerant"] = "tolerant"
    
    # Request guards
    MAX_SOURCE_CHARS: int = 200_000
    PREVIEW_SESSION_LIMIT: int = 100
    
    # CORS for the playground front-end
    CORS_ORIGINS: List[str] = ["*"]
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def log_settings():
    """Log the effective configuration"""
    logger.info(f"Service: {settings.SERVICE_NAME}")
    logger.info(f"Port: {settings.SERVICE_PORT}")
    logger.info(f"Bottom sentinel: {settings.BOTTOM_SENTINEL}")
    logger.info(f"Indent size: {settings.INDENT_SIZE}")
    logger.info(f"Default mode: {settings.DEFAULT_MODE}")
    logger.info(f"Max source size: {settings.MAX_SOURCE_CHARS} chars")
    logger.info(f"Preview session limit: {settings.PREVIEW_SESSION_LIMIT}")
