from pydantic_settings import BaseSettings
import os


DEFAULT_SEED_FILE = os.path.join(os.path.dirname(__file__), "seeds", "exercises.yaml")


class Settings(BaseSettings):
    """Application configuration settings"""

    # Application
    app_name: str = "Code Collab"
    debug: bool = False
    api_version: str = "v1"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Database
    database_url: str = "sqlite:///./codecollab.db"

    # Exercise seeding
    seed_file: str = DEFAULT_SEED_FILE
    seed_on_startup: bool = True

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # Prebuilt editor UI
    client_dist_dir: str = "./client/dist"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
