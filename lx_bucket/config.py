"""
Configuration for lx_bucket, read from the environment.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BucketSettings(BaseSettings):
    """Default tuning and logging settings."""

    model_config = SettingsConfigDict(
        env_prefix="LX_BUCKET_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Tuning
    capacity: float = Field(default=10.0, gt=0, allow_inf_nan=False)
    leak_rate: float = Field(default=1.0, gt=0, allow_inf_nan=False)

    # Logging
    log_level: str = Field(default="info")
    json_logs: bool = Field(default=True)


def get_settings(**overrides) -> BucketSettings:
    """Load settings, letting keyword overrides win over the environment."""
    return BucketSettings(**overrides)
