"""Configuration handling."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Tuple

import yaml

from .models import DeviceType


@dataclass
class CatalogConfig:
    internal: int = 1
    three_point_five: int = 1
    usb: int = 3
    hdmi: int = 3
    bluetooth: int = 3

    def to_spec(self) -> List[Tuple[DeviceType, int]]:
        return [
            (DeviceType.INTERNAL, self.internal),
            (DeviceType.THREE_POINT_FIVE, self.three_point_five),
            (DeviceType.USB, self.usb),
            (DeviceType.HDMI, self.hdmi),
            (DeviceType.BLUETOOTH, self.bluetooth),
        ]


@dataclass
class Config:
    strategy: str = "priority_list"
    log_dir: str = "logs"
    debug_logging: bool = False
    catalog: CatalogConfig = field(default_factory=CatalogConfig)


class ConfigError(ValueError):
    """Raised when a config file cannot be turned into a Config."""


def load_config(path: str) -> Config:
    with open(path, "r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level.")

    catalog_data = data.get("catalog") or {}
    if not isinstance(catalog_data, dict):
        raise ConfigError(f"{path}: catalog must be a mapping of device counts.")
    try:
        catalog = CatalogConfig(**catalog_data)
    except TypeError as exc:
        known = ", ".join(CatalogConfig.__dataclass_fields__)
        raise ConfigError(f"{path}: bad catalog entry ({exc}). Known: {known}") from exc

    return Config(
        strategy=data.get("strategy", "priority_list"),
        log_dir=data.get("log_dir", "logs"),
        debug_logging=bool(data.get("debug_logging", False)),
        catalog=catalog,
    )


def load_config_or_default(path: str | None) -> Config:
    if path and os.path.exists(path):
        return load_config(path)
    return Config()


def save_config(path: str, config: Config) -> None:
    data = {
        "strategy": config.strategy,
        "log_dir": config.log_dir,
        "debug_logging": config.debug_logging,
        "catalog": {
            "internal": config.catalog.internal,
            "three_point_five": config.catalog.three_point_five,
            "usb": config.catalog.usb,
            "hdmi": config.catalog.hdmi,
            "bluetooth": config.catalog.bluetooth,
        },
    }
    with open(path, "w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False)
