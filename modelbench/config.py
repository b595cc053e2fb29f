"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # HTTP
    service_port: int = 8002
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Upload intake
    max_upload_bytes: int = 500 * 1024 * 1024
    upload_delay_seconds: float = 2.0

    # Simulated benchmarking
    benchmark_min_delay_seconds: float = 1.0
    benchmark_max_delay_seconds: float = 4.0
    benchmark_failure_rate: float = 0.0
    benchmark_seed: Optional[int] = None

    # Reports
    min_comparison_models: int = 2

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
