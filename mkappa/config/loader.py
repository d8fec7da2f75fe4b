"""Configuration loading from YAML files and the environment.

Settings are layered, lowest to highest: profile, YAML file, ``MKAPPA_``
environment variables, keyword overrides. A YAML file looks like::

    profile: dev
    engine:
      default_scale: ordinal
      precision: 2
    logging:
      level: WARNING
      file: ~/logs/mkappa.log
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from mkappa.config.config import SECTIONS, MKappaConfig
from mkappa.config.env import load_from_env, profile_from_env
from mkappa.config.profiles import get_profile

logger = logging.getLogger(__name__)


def load_yaml_file(path: Path | str) -> dict[str, Any]:
    """Load a YAML configuration file.

    Parameters
    ----------
    path : Path | str
        Path to YAML file.

    Returns
    -------
    dict[str, Any]
        Parsed content; empty for an empty file.

    Raises
    ------
    FileNotFoundError
        If file doesn't exist.
    yaml.YAMLError
        If YAML is malformed.
    ValueError
        If the file does not hold a mapping of settings.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path) as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(
            f"Configuration file {path} must hold a mapping, "
            f"got {type(content).__name__}"
        )
    return content


def apply_sections(
    settings: dict[str, Any], layer: Mapping[str, Any]
) -> dict[str, Any]:
    """Overlay one layer of settings onto another.

    Section mappings are merged field by field; anything else is replaced.
    Neither input is modified.

    Examples
    --------
    >>> apply_sections({"engine": {"strict": False, "precision": 3}},
    ...                {"engine": {"precision": 5}})
    {'engine': {'strict': False, 'precision': 5}}
    """
    merged = dict(settings)
    for key, value in layer.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def route_overrides(overrides: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    """Place flat keyword overrides into the section that owns each field.

    Raises
    ------
    TypeError
        If a name is not a field of any section.

    Examples
    --------
    >>> route_overrides({"strict": True, "level": "DEBUG"})
    {'engine': {'strict': True}, 'logging': {'level': 'DEBUG'}}
    """
    routed: dict[str, dict[str, Any]] = {}
    for name, value in overrides.items():
        section = next(
            (s for s, model in SECTIONS.items() if name in model.model_fields), None
        )
        if section is None:
            raise TypeError(f"Unknown setting {name!r}")
        routed.setdefault(section, {})[name] = value
    return routed


def load_config(
    config_path: Path | str | None = None,
    profile: str | None = None,
    use_env: bool = True,
    **overrides: Any,
) -> MKappaConfig:
    """Load configuration from a profile, a YAML file, the environment and overrides.

    The base profile is the ``profile`` argument, else ``MKAPPA_PROFILE``,
    else the file's ``profile`` key, else ``"default"``.

    Parameters
    ----------
    config_path : Path | str | None
        Path to YAML config file. If None, only the profile is used.
    profile : str | None
        Base profile name (default, dev, test).
    use_env : bool
        Whether to apply ``MKAPPA_`` environment variables.
    **overrides : Any
        Field overrides by name, e.g. ``strict=True`` or ``level="DEBUG"``.

    Returns
    -------
    MKappaConfig
        Validated configuration.

    Raises
    ------
    FileNotFoundError
        If config_path is specified but doesn't exist.
    yaml.YAMLError
        If YAML file is malformed.
    ValueError
        If the profile is unknown or the file is not a mapping.
    TypeError
        If an override names no known field.
    ValidationError
        If a setting is invalid or a section or field is unknown.

    Examples
    --------
    >>> load_config(profile="dev", use_env=False).engine.reporter
    'console'
    >>> load_config(use_env=False, default_scale="ratio").engine.default_scale
    <Scale.RATIO: 'ratio'>
    """
    file_settings = load_yaml_file(config_path) if config_path is not None else {}
    env_settings = load_from_env() if use_env else {}
    env_profile = profile_from_env() if use_env else None

    name = profile or env_profile or file_settings.get("profile") or "default"
    settings = get_profile(name).model_dump()
    for layer in (file_settings, env_settings, route_overrides(overrides)):
        settings = apply_sections(settings, layer)
    settings["profile"] = name

    logger.debug(
        f"Loaded configuration (profile={name!r}, file={config_path}, "
        f"env sections={sorted(env_settings)})"
    )
    return MKappaConfig(**settings)
