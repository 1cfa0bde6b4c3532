"""Step snapshots and the overwrite-on-write history built from them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple

from .catalog import DeviceCatalog, default_catalog
from .events import Event, EventType
from .models import Device
from .strategy import PriorityListStrategy, Strategy

logger = logging.getLogger("audioswitch")


@dataclass(frozen=True)
class Step:
    label: str
    connected_devices: Tuple[Device, ...]
    active: Optional[Device]
    # Owned by this step; transitions always work on a clone.
    strategy: Strategy

    @classmethod
    def initial(cls, strategy: Optional[Strategy] = None) -> "Step":
        return cls(
            label="Initial state",
            connected_devices=(),
            active=None,
            strategy=strategy if strategy is not None else PriorityListStrategy(),
        )

    def _clone(self, label: str) -> "Step":
        return replace(self, label=label, strategy=self.strategy.clone())

    def plug(self, device: Device) -> "Step":
        s = self._clone(f"Plug {device.name}")
        connected = s.connected_devices
        if all(d.name != device.name for d in connected):
            connected = connected + (device,)
        active = s.strategy.probe(connected)
        return replace(s, connected_devices=connected, active=active)

    def unplug(self, device: Device) -> "Step":
        s = self._clone(f"Unplug {device.name}")
        connected = tuple(d for d in s.connected_devices if d.name != device.name)
        active = s.strategy.probe(connected)
        return replace(s, connected_devices=connected, active=active)

    def select(self, device: Device) -> "Step":
        s = self._clone(f"Select {device.name}")
        s.strategy.select(device)
        return replace(s, active=device)

    def apply(self, event: Event, catalog: Optional[DeviceCatalog] = None) -> "Step":
        catalog = catalog or default_catalog()
        if event.type == EventType.GOTO:
            raise ValueError("goto is a timeline operation, not a step transition.")
        device = catalog.resolve(event.device or "")
        if event.type == EventType.PLUG:
            return self.plug(device)
        if event.type == EventType.UNPLUG:
            return self.unplug(device)
        return self.select(device)

    def is_connected(self, device: Device) -> bool:
        return any(d.name == device.name for d in self.connected_devices)


class Timeline:
    """
    Linear history of steps.

    Index 0 is the initial step. Pushing after an earlier step discards
    every step that followed it.
    """

    def __init__(self, initial: Optional[Step] = None) -> None:
        self.steps: List[Step] = [initial if initial is not None else Step.initial()]
        self.position = 0

    @property
    def current(self) -> Step:
        return self.steps[self.position]

    def push(self, index: int, step: Step) -> None:
        if not 0 <= index < len(self.steps):
            raise IndexError(f"Step {index} is outside the timeline (0..{len(self.steps) - 1}).")
        dropped = len(self.steps) - index - 1
        if dropped:
            logger.debug("Discarding %s step(s) after step %s", dropped, index)
        del self.steps[index + 1 :]
        self.steps.append(step)
        self.position = len(self.steps) - 1

    def apply(self, index: int, event: Event, catalog: Optional[DeviceCatalog] = None) -> Step:
        step = self.steps[index].apply(event, catalog)
        self.push(index, step)
        return step

    def goto(self, index: int) -> Step:
        if not 0 <= index < len(self.steps):
            raise IndexError(f"Step {index} is outside the timeline (0..{len(self.steps) - 1}).")
        self.position = index
        return self.current

    def dispatch(self, event: Event, catalog: Optional[DeviceCatalog] = None) -> Step:
        """Apply an event at the current position (or move the position for goto)."""
        if event.type == EventType.GOTO:
            return self.goto(event.index if event.index is not None else 0)
        return self.apply(self.position, event, catalog)

    def labels(self) -> List[str]:
        return [s.label for s in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)
