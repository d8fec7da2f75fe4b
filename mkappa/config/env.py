"""Environment variable overrides for mkappa settings.

``MKAPPA_PROFILE`` names the base profile. Each engine and logging field is
read from ``MKAPPA_<SECTION>__<FIELD>``, e.g. ``MKAPPA_ENGINE__STRICT=true``
or ``MKAPPA_LOGGING__LEVEL=debug``. Values are passed to the configuration
models as strings and converted there.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from mkappa.config.config import SECTIONS

logger = logging.getLogger(__name__)

ENV_PREFIX = "MKAPPA_"
PROFILE_VARIABLE = f"{ENV_PREFIX}PROFILE"


def env_variable(section: str, field: str) -> str:
    """Name of the environment variable for one configuration field.

    Examples
    --------
    >>> env_variable("engine", "default_scale")
    'MKAPPA_ENGINE__DEFAULT_SCALE'
    """
    return f"{ENV_PREFIX}{section}__{field}".upper()


def env_variables() -> dict[str, tuple[str, str]]:
    """Map every supported variable name to its ``(section, field)``."""
    return {
        env_variable(section, field): (section, field)
        for section, model in SECTIONS.items()
        for field in model.model_fields
    }


def profile_from_env(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the profile named by ``MKAPPA_PROFILE``, if set and not blank."""
    environ = os.environ if environ is None else environ
    name = environ.get(PROFILE_VARIABLE, "").strip()
    return name or None


def load_from_env(
    environ: Mapping[str, str] | None = None,
) -> dict[str, dict[str, str]]:
    """Collect section overrides from ``MKAPPA_`` environment variables.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Variables to read. ``os.environ`` when omitted.

    Returns
    -------
    dict[str, dict[str, str]]
        Raw values keyed by section, then field.

    Examples
    --------
    >>> load_from_env({"MKAPPA_ENGINE__STRICT": "true", "HOME": "/root"})
    {'engine': {'strict': 'true'}}
    """
    environ = os.environ if environ is None else environ
    known = env_variables()

    overrides: dict[str, dict[str, str]] = {}
    for name, value in sorted(environ.items()):
        if not name.startswith(ENV_PREFIX) or name == PROFILE_VARIABLE:
            continue
        if name not in known:
            logger.warning(f"Ignoring unknown setting {name}")
            continue
        section, field = known[name]
        overrides.setdefault(section, {})[field] = value.strip()
    return overrides
