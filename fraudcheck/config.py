"""
Gateway configuration
Everything comes from environment variables, read once at startup
"""
import logging
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fraudcheck_features.constants import (
    DEFAULT_NAMESPACE,
    DEFAULT_SET_NAME,
    FEATURE_VECTOR_LENGTH,
    FRAUD_THRESHOLD,
)

DEFAULT_MODEL_SERVING_URL = "http://127.0.0.1:8501/v1/models/fraud:predict"


class Settings(BaseModel):
    """Runtime settings for the scoring gateway"""
    model_config = ConfigDict(frozen=True)

    # Store
    redis_url: Optional[str] = None
    redis_host: str = "127.0.0.1"
    redis_port: int = Field(default=6379, gt=0)
    redis_password: Optional[str] = None
    namespace: str = DEFAULT_NAMESPACE
    set_name: str = DEFAULT_SET_NAME

    # Model serving
    scoring_url: str = DEFAULT_MODEL_SERVING_URL
    feature_vector_length: int = Field(default=FEATURE_VECTOR_LENGTH, ge=2)
    fraud_threshold: float = Field(default=FRAUD_THRESHOLD, ge=0.0, le=1.0)
    timeout_sec: float = Field(default=10.0, gt=0)

    # HTTP server
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=8090, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (unset -> defaults)"""
        env = {
            "redis_url": os.getenv("REDIS_URL"),
            "redis_host": os.getenv("REDIS_HOST"),
            "redis_port": os.getenv("REDIS_PORT"),
            "redis_password": os.getenv("REDIS_PASSWORD"),
            "namespace": os.getenv("STORE_NAMESPACE"),
            "set_name": os.getenv("STORE_SET_NAME"),
            "scoring_url": os.getenv("MODEL_SERVING_URL"),
            "feature_vector_length": os.getenv("FEATURE_VECTOR_LENGTH"),
            "fraud_threshold": os.getenv("FRAUD_THRESHOLD"),
            "timeout_sec": os.getenv("MODEL_SERVING_TIMEOUT_SEC"),
            "api_host": os.getenv("API_HOST"),
            "api_port": os.getenv("API_PORT"),
            "log_level": os.getenv("LOG_LEVEL"),
        }
        return cls(**{key: value for key, value in env.items() if value is not None})

    def store_url(self) -> str:
        """Priority: REDIS_URL > construct from host/port/password"""
        if self.redis_url:
            return self.redis_url
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}"
        return f"redis://{self.redis_host}:{self.redis_port}"


def setup_logging(level: str = "INFO"):
    """Configure logging"""
    logging.basicConfig(
        format='%(asctime)s [%(levelname)s] %(message)s',
        level=getattr(logging, level.upper(), logging.INFO),
        datefmt='%Y-%m-%d %H:%M:%S'
    )
