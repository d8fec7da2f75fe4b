"""Configuration system for the mkappa package.

Examples
--------
>>> from mkappa.config import get_profile, load_config
>>> get_profile("dev").logging.level
'DEBUG'
>>> load_config(use_env=False, strict=True).engine.strict
True
"""

from __future__ import annotations

from mkappa.config.config import SECTIONS, MKappaConfig
from mkappa.config.engine import EngineConfig
from mkappa.config.env import ENV_PREFIX, load_from_env, profile_from_env
from mkappa.config.loader import (
    apply_sections,
    load_config,
    load_yaml_file,
    route_overrides,
)
from mkappa.config.logging import LoggingConfig, configure_logging
from mkappa.config.profiles import (
    DEFAULT_CONFIG,
    DEV_CONFIG,
    PROFILES,
    TEST_CONFIG,
    get_profile,
    list_profiles,
)

__all__ = [
    # Main config
    "MKappaConfig",
    "SECTIONS",
    # Config sections
    "EngineConfig",
    "LoggingConfig",
    # Profiles
    "DEFAULT_CONFIG",
    "DEV_CONFIG",
    "TEST_CONFIG",
    "PROFILES",
    "get_profile",
    "list_profiles",
    # Loading
    "load_config",
    "load_yaml_file",
    "apply_sections",
    "route_overrides",
    "ENV_PREFIX",
    "load_from_env",
    "profile_from_env",
    # Logging
    "configure_logging",
]
