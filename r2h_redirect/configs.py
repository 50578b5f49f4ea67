from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"  # The logging level to use.
    log_file: Optional[str] = Field(
        None, description="Optional file that receives a copy of every diagnostic line. Example: middleware_errors.log"
    )
    enable_legacy_format: bool = True  # Whether to accept the composite single-URL query convention.
    host: str = "0.0.0.0"  # The interface uvicorn binds to.
    port: int = 8888  # The port uvicorn listens on.
    workers: int = 1  # The number of uvicorn worker processes.

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
