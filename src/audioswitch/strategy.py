"""Active device selection strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple, Type

from .models import (
    Device,
    DeviceType,
    builtin_priority,
    contains,
    device_names,
    index_of,
)

logger = logging.getLogger("audioswitch")


class NotConnectedError(RuntimeError):
    """Raised when selecting a device that is not connected."""

    def __init__(self, device: Device, connected: Sequence[Device]) -> None:
        self.device = device
        self.connected = device_names(connected)
        super().__init__(
            f"{device.name} is not connected. Connected: {', '.join(self.connected) or '(none)'}"
        )


class Strategy(ABC):
    """Policy deciding which connected device is active."""

    @abstractmethod
    def probe(self, new_devices: Sequence[Device]) -> Optional[Device]: ...

    @abstractmethod
    def select(self, device: Optional[Device]) -> None: ...

    @abstractmethod
    def clone(self) -> "Strategy": ...

    def visualize(self) -> str:
        return "N/A"

    def preference_order(self) -> Tuple[Device, ...]:
        return ()


def _dedupe(devices: Sequence[Device]) -> List[Device]:
    unique: List[Device] = []
    for device in devices:
        if not contains(unique, device):
            unique.append(device)
    return unique


class PriorityListStrategy(Strategy):
    """
    Remembers every explicitly selected device in a preference order.

    priority_list is kept most preferred first, so a device's user priority
    is its index and a smaller index wins. Devices that were never selected
    have no user priority and fall back to the builtin table.
    """

    def __init__(self) -> None:
        self.connected_devices: List[Device] = []
        self.priority_list: List[Device] = []
        self.active: Optional[Device] = None

    def clone(self) -> "PriorityListStrategy":
        s = PriorityListStrategy()
        s.connected_devices = list(self.connected_devices)
        s.priority_list = list(self.priority_list)
        s.active = self.active
        return s

    def probe(self, new_devices: Sequence[Device]) -> Optional[Device]:
        new_devices = _dedupe(new_devices)
        self.connected_devices = [
            d for d in self.connected_devices if contains(new_devices, d)
        ]
        plugged = [d for d in new_devices if not contains(self.connected_devices, d)]

        if self.active is not None and not contains(self.connected_devices, self.active):
            logger.debug("Active device %s was unplugged", self.active.name)
            self.active = None

        if self.active is None:
            # Start with the remaining device with the best user priority.
            self.select(self._best_by_user_priority(self.connected_devices))

        # Jack insertion is processed last so it wins the final comparison.
        plugged.sort(key=lambda d: d.type == DeviceType.THREE_POINT_FIVE)

        for hotplug in plugged:
            self.connected_devices.append(hotplug)
            if self.should_switch_to_hotplug(self.active, hotplug):
                logger.debug(
                    "Switching to hotplugged %s (was %s)",
                    hotplug.name,
                    self.active.name if self.active else None,
                )
                self.select(hotplug)

        if self.active is None:
            # Nothing remembered; fall back to the builtin priority.
            self.select(self._best_by_builtin_priority(new_devices))

        return self.active

    def select(self, device: Optional[Device]) -> None:
        if device is None:
            self.active = None
            return
        if not contains(self.connected_devices, device):
            raise NotConnectedError(device, self.connected_devices)
        self.active = device
        self._bubble_up(device)

    def visualize(self) -> str:
        if not self.priority_list:
            return "User Priority: (empty)"
        return "User Priority: " + " > ".join(device_names(self.priority_list))

    def preference_order(self) -> Tuple[Device, ...]:
        return tuple(self.priority_list)

    def user_priority(self, device: Device) -> Optional[int]:
        return index_of(self.priority_list, device)

    def should_switch_to_hotplug(self, current: Optional[Device], hotplug: Device) -> bool:
        if current is None:
            return True
        if hotplug.type == DeviceType.THREE_POINT_FIVE:
            return True

        current_priority = self.user_priority(current)
        hotplug_priority = self.user_priority(hotplug)
        if current_priority is not None and hotplug_priority is not None:
            return hotplug_priority <= current_priority
        return builtin_priority(current) <= builtin_priority(hotplug)

    def _bubble_up(self, device: Device) -> None:
        """
        Promote device above every other connected device.

        A first-time device enters at the least preferred end. It then takes
        the slot of the most preferred connected device, so ranks relative
        to disconnected devices are preserved.
        """
        if not contains(self.priority_list, device):
            self.priority_list.append(device)
        connected = set(device_names(self.connected_devices))
        from_index = index_of(self.priority_list, device)
        to_index = next(
            i for i, d in enumerate(self.priority_list) if d.name in connected
        )
        self.priority_list.pop(from_index)
        self.priority_list.insert(to_index, device)

    def _best_by_user_priority(self, devices: Sequence[Device]) -> Optional[Device]:
        best: Optional[Device] = None
        best_priority: Optional[int] = None
        for device in devices:
            priority = self.user_priority(device)
            if priority is None:
                continue
            if best_priority is None or priority < best_priority:
                best, best_priority = device, priority
        return best

    @staticmethod
    def _best_by_builtin_priority(devices: Sequence[Device]) -> Optional[Device]:
        best: Optional[Device] = None
        for device in devices:
            if best is None or builtin_priority(best) < builtin_priority(device):
                best = device
        return best


STRATEGIES: Dict[str, Type[Strategy]] = {
    "priority_list": PriorityListStrategy,
}


def create_strategy(name: str = "priority_list") -> Strategy:
    try:
        factory = STRATEGIES[name]
    except KeyError as exc:
        raise ValueError(
            f"Unknown strategy {name!r}. Available: {', '.join(sorted(STRATEGIES))}"
        ) from exc
    return factory()
