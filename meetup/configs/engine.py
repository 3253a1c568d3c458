"""
Session engine and host configuration.

Operational knobs for the session engine (store timeout) and for the host
process (reaper cadence, CORS). Freshness and retention windows are fixed
policy constants of the session engine.

Dependencies: pydantic, pydantic_settings
System role: Runtime configuration for engine and reaper scheduling
"""

from pydantic import Field

from meetup.configs.base import BaseSettings


class EngineSettings(BaseSettings):
    """Session engine runtime configuration."""

    store_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for a single store operation before it fails",
    )
    reap_interval_seconds: float = Field(
        default=3600.0,
        gt=0,
        description="Delay between retention sweeps after the startup sweep",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the HTTP API",
    )
