"""Data models for audioswitch."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


class DeviceType(str, Enum):
    INTERNAL = "Internal"
    THREE_POINT_FIVE = "3.5mm"
    USB = "USB"
    HDMI = "HDMI"
    BLUETOOTH = "Bluetooth"


@dataclass(frozen=True)
class Device:
    type: DeviceType
    # Unique key; devices sharing a type carry an index suffix ("USB 2").
    name: str


# Fallback ranking only, consulted when there is no recorded user preference.
BUILTIN_PRIORITY = {
    DeviceType.THREE_POINT_FIVE: 3,
    DeviceType.USB: 3,
    DeviceType.BLUETOOTH: 3,
    DeviceType.INTERNAL: 2,
    DeviceType.HDMI: 1,
}


def builtin_priority(device: Device) -> int:
    return BUILTIN_PRIORITY[device.type]


def contains(devices: Iterable[Device], device: Device) -> bool:
    return any(d.name == device.name for d in devices)


def index_of(devices: List[Device], device: Device) -> Optional[int]:
    for idx, candidate in enumerate(devices):
        if candidate.name == device.name:
            return idx
    return None


def device_names(devices: Iterable[Device]) -> List[str]:
    return [d.name for d in devices]
