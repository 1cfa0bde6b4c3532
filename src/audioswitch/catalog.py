"""Device catalog: the fixed set of devices available to a simulation."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterator, List, Optional, Sequence, Tuple

from .models import Device, DeviceType

CatalogSpec = Sequence[Tuple[DeviceType, int]]

DEFAULT_CATALOG_SPEC: Tuple[Tuple[DeviceType, int], ...] = (
    (DeviceType.INTERNAL, 1),
    (DeviceType.THREE_POINT_FIVE, 1),
    (DeviceType.USB, 3),
    (DeviceType.HDMI, 3),
    (DeviceType.BLUETOOTH, 3),
)


class UnknownDeviceError(KeyError):
    """Raised when a device name is not part of the catalog."""


def build_devices(spec: CatalogSpec) -> List[Device]:
    devices: List[Device] = []
    for device_type, count in spec:
        if count == 1:
            devices.append(Device(type=device_type, name=device_type.value))
            continue
        for i in range(1, count + 1):
            devices.append(Device(type=device_type, name=f"{device_type.value} {i}"))
    return devices


class DeviceCatalog:
    """Immutable collection of the devices a timeline can plug in."""

    def __init__(self, spec: CatalogSpec = DEFAULT_CATALOG_SPEC) -> None:
        self._devices: Tuple[Device, ...] = tuple(build_devices(spec))

    def all(self) -> Tuple[Device, ...]:
        return self._devices

    def get(self, name: str) -> Device:
        for device in self._devices:
            if device.name == name:
                return device
        raise UnknownDeviceError(
            f"{name} is not in the catalog. Known: {', '.join(d.name for d in self._devices)}"
        )

    def find(self, query: Optional[str]) -> Optional[Device]:
        if not query:
            return None
        query_lower = query.strip().lower()
        for device in self._devices:
            if device.name.lower() == query_lower:
                return device
        for device in self._devices:
            if query_lower in device.name.lower():
                return device
        return None

    def resolve(self, query: str) -> Device:
        device = self.find(query)
        if device is None:
            raise UnknownDeviceError(
                f"{query} is not in the catalog. Known: {', '.join(d.name for d in self._devices)}"
            )
        return device

    def __iter__(self) -> Iterator[Device]:
        return iter(self._devices)

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, device: object) -> bool:
        return isinstance(device, Device) and device in self._devices


@lru_cache(maxsize=1)
def default_catalog() -> DeviceCatalog:
    return DeviceCatalog(DEFAULT_CATALOG_SPEC)
