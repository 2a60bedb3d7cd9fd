from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./followfeed.db", description="Database connection string")
    SECRET_KEY: str = Field(default="your-secret-key-change-this-in-production", description="JWT secret key")
    ALGORITHM: str = Field(default="HS256", description="Algorithm for JWT (e.g., HS256)")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, description="How long (in minutes) an access token is valid")
    REFRESH_TOKEN_EXPIRE_MINUTES: int = Field(default=43200, description="How long (in minutes) a refresh token is valid (default 30 days)")
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:3000", "http://localhost:5173"], description="Origins allowed by CORS")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    # Notifications
    BROADCAST_DRIVER: str = Field(default="websocket", description="Live notification driver: websocket, log or null")
    NOTIFICATION_MENU_LIMIT: int = Field(default=5, description="How many notifications the menu shows")

    # Scheduling
    SCHEDULER_IN_PROCESS: bool = Field(default=False, description="Run due scheduled tasks every minute inside the web process")
    SCHEDULE_LEASE_TTL_SECONDS: int = Field(default=3600, description="Lifetime of a single-server task lease")
    CRON_USER: str = Field(default="root", description="User column of the cron.d entry")
    CRON_ENV_SCRIPT: str = Field(default="/opt/elasticbeanstalk/support/envvars", description="Script sourced before the scheduler runs")
    CRON_APP_DIR: str = Field(default="/var/app/current", description="Directory the scheduler runs from")
    CRON_PYTHON: str = Field(default="/usr/bin/python3", description="Interpreter used by the cron entry")
    CRON_LOG_TARGET: str = Field(default="/dev/null", description="Where the cron entry appends scheduler output")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
