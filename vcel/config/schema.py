"""Pydantic schema for configuration validation."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class PollingConfig(BaseModel):
    """Schema for the poll loop."""

    model_config = ConfigDict(frozen=True)

    interval: float = Field(
        default=10.0, gt=0, description="Seconds to sleep between fetches"
    )
    batch_size: int = Field(
        default=10, ge=1, le=1000, description="Events requested per fetch"
    )
    page_size: int = Field(
        default=0, ge=0, description="Collector page size, 0 lets the server choose"
    )


class RetryConfig(BaseModel):
    """Schema for fetch retries. ``max_retries: 0`` makes every fetch error fatal."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=0, ge=0, le=100)
    base_delay: float = Field(default=1.0, gt=0)
    max_delay: float = Field(default=60.0, gt=0)

    @model_validator(mode="after")
    def validate_delays(self) -> "RetryConfig":
        if self.base_delay > self.max_delay:
            raise ValueError(
                f"base_delay ({self.base_delay}) must not exceed "
                f"max_delay ({self.max_delay})"
            )
        return self


class LoggingConfig(BaseModel):
    """Schema for diagnostic logging."""

    model_config = ConfigDict(frozen=True)

    level: LogLevel = Field(default="WARNING")
    file: Optional[str] = Field(default=None, description="Optional log file")


class VcelConfig(BaseModel):
    """Root schema of the tuning file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    polling: PollingConfig = Field(default_factory=PollingConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class Settings(BaseModel):
    """Everything the tailer needs, fixed at startup."""

    model_config = ConfigDict(frozen=True)

    url: str = ""
    insecure: bool = False
    datacenter: str = ""
    tuning: VcelConfig = Field(default_factory=VcelConfig)
