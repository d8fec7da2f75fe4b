"""Logging configuration for the mkappa package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PACKAGE_LOGGER = "mkappa"


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Parameters
    ----------
    level : str
        Log level of the ``mkappa`` logger.
    format : str
        Log format string.
    file : Path | None
        Log file path.
    console : bool
        Whether to log to console.

    Examples
    --------
    >>> config = LoggingConfig()
    >>> config.level
    'INFO'
    >>> LoggingConfig(level="debug").level
    'DEBUG'
    """

    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    file: Path | None = Field(default=None, description="Log file path")
    console: bool = Field(default=True, description="Log to console")

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("file", mode="before")
    @classmethod
    def _expand_file(cls, value: Any) -> Any:
        # an empty path switches file logging off
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            return Path(value).expanduser()
        return value


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Apply a logging configuration to the ``mkappa`` logger.

    Replaces handlers installed by earlier calls, so it is safe to call
    repeatedly with different configurations.

    Parameters
    ----------
    config : LoggingConfig
        Logging settings to apply.

    Returns
    -------
    logging.Logger
        The configured package logger.

    Examples
    --------
    >>> logger = configure_logging(LoggingConfig(level="DEBUG"))
    >>> logger.level == logging.DEBUG
    True
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = []
    if config.console:
        handlers.append(logging.StreamHandler())
    if config.file is not None:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.file))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
