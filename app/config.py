"""
Application configuration
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""
    
    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    API_TITLE: str = "covreport API"
    API_VERSION: str = "0.1.0"
    
    # Decoding
    DEFAULT_ARRAY_NAME: str = "ist_arr"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
