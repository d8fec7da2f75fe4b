"""Main configuration model for the mkappa package."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mkappa.config.engine import EngineConfig
from mkappa.config.logging import LoggingConfig

# configuration sections and the models that validate them
SECTIONS: dict[str, type[BaseModel]] = {
    "engine": EngineConfig,
    "logging": LoggingConfig,
}


class MKappaConfig(BaseModel):
    """Main configuration for the mkappa package.

    Parameters
    ----------
    profile : str
        Configuration profile name.
    engine : EngineConfig
        Kappa engine configuration.
    logging : LoggingConfig
        Logging configuration.

    Examples
    --------
    >>> config = MKappaConfig()
    >>> config.profile
    'default'
    >>> config.engine.reporter
    'logging'
    >>> config.logging.level
    'INFO'
    """

    model_config = ConfigDict(extra="forbid")

    profile: str = Field(default="default", description="Configuration profile name")
    engine: EngineConfig = Field(
        default_factory=EngineConfig, description="Engine configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
