"""Configuration profiles for the mkappa package.

``default`` logs descriptives and results at INFO level, ``dev`` prints
rich tables and debug logs, ``test`` raises on every failure and stays
quiet.
"""

from __future__ import annotations

from mkappa.config.config import MKappaConfig
from mkappa.config.engine import EngineConfig
from mkappa.config.logging import LoggingConfig

DEFAULT_CONFIG = MKappaConfig()

DEV_CONFIG = MKappaConfig(
    profile="dev",
    engine=EngineConfig(reporter="console", precision=4),
    logging=LoggingConfig(level="DEBUG", console=True),
)
"""Development configuration profile.

Examples
--------
>>> DEV_CONFIG.logging.level
'DEBUG'
>>> DEV_CONFIG.engine.reporter
'console'
"""

TEST_CONFIG = MKappaConfig(
    profile="test",
    engine=EngineConfig(strict=True, reporter="none"),
    logging=LoggingConfig(level="WARNING", console=False),
)

PROFILES: dict[str, MKappaConfig] = {
    "default": DEFAULT_CONFIG,
    "dev": DEV_CONFIG,
    "test": TEST_CONFIG,
}


def get_profile(name: str) -> MKappaConfig:
    """Get configuration profile by name.

    Parameters
    ----------
    name : str
        Profile name. Must be one of: 'default', 'dev', 'test'.

    Returns
    -------
    MKappaConfig
        Independent copy of the profile.

    Raises
    ------
    ValueError
        If profile name is not found in the registry.

    Examples
    --------
    >>> get_profile("test").engine.strict
    True
    """
    if name not in PROFILES:
        available = ", ".join(list_profiles())
        raise ValueError(f"Profile {name!r} not found. Available profiles: {available}")
    return PROFILES[name].model_copy(deep=True)


def list_profiles() -> list[str]:
    """Return available profile names, sorted alphabetically."""
    return sorted(PROFILES)
