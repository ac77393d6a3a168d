from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from importlib.resources import files as resource_files
from typing import Optional

import yaml

from ..exceptions import SettingsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShopRestrictionSettings:
    plugin_name: str = "LWP_WhatShopCanBuy"
    command_name: str = "buy_only"
    log_restrictions: bool = False


_TYPES = {"plugin_name": str, "command_name": str, "log_restrictions": bool}


def load_settings(path: Optional[str] = None) -> ShopRestrictionSettings:
    """Load shop restriction settings from YAML.

    If path is None, loads the embedded default resource at
    shop_restrictions/config/default_settings.yaml. Keys missing from the
    file keep their defaults.
    """
    if path is None:
        data = resource_files("shop_restrictions.config").joinpath("default_settings.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded settings resource")
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
        logger.debug("Loaded settings from path: %s", path)

    try:
        raw = yaml.safe_load(data) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid settings YAML: {e}") from e
    if not isinstance(raw, dict):
        raise SettingsError("Settings document must be a mapping")

    values = {}
    for f in fields(ShopRestrictionSettings):
        if f.name not in raw:
            continue
        value = raw[f.name]
        if not isinstance(value, _TYPES[f.name]):
            raise SettingsError(f"Setting '{f.name}' must be {_TYPES[f.name].__name__}, got {value!r}")
        values[f.name] = value
    unknown = sorted(set(raw) - set(_TYPES))
    if unknown:
        logger.warning("Ignoring unknown settings: %s", ", ".join(map(str, unknown)))

    settings = ShopRestrictionSettings(**values)
    logger.info("Shop restriction command: %s/%s", settings.plugin_name, settings.command_name)
    return settings
