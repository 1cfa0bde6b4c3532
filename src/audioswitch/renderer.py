"""Plain-text rendering of steps and timelines."""

from __future__ import annotations

from typing import List, Optional

from .catalog import DeviceCatalog, default_catalog
from .models import Device
from .timeline import Step, Timeline


def _chip(step: Step, device: Device) -> str:
    if not step.is_connected(device):
        return f"({device.name})"
    if step.active is not None and step.active.name == device.name:
        return f"[*{device.name}]"
    return f"[{device.name}]"


def render_device_chips(step: Step, catalog: Optional[DeviceCatalog] = None) -> str:
    catalog = catalog or default_catalog()
    return " ".join(_chip(step, device) for device in catalog)


def render_step(index: int, step: Step, catalog: Optional[DeviceCatalog] = None) -> str:
    lines: List[str] = []
    lines.append(f"{index}. {step.label}")
    lines.append(f"   {render_device_chips(step, catalog)}")
    lines.append(f"   {step.strategy.visualize()}")
    return "\n".join(lines)


def render_timeline(timeline: Timeline, catalog: Optional[DeviceCatalog] = None) -> str:
    blocks = [render_step(i, step, catalog) for i, step in enumerate(timeline)]
    return "\n\n".join(blocks) + "\n"


def render_legend() -> str:
    return "\n".join(
        [
            "[*Device]  connected, active",
            "[Device]   connected (select it to make it active)",
            "(Device)   disconnected (plug it in)",
        ]
    )
