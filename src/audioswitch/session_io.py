"""Scenario loading and timeline trace persistence."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import List, Optional

import yaml

from .events import Event, ScenarioFormatError, parse_event
from .models import device_names
from .timeline import Timeline


@dataclass
class StepRecord:
    index: int
    label: str
    connected: List[str]
    active: Optional[str]
    preference: List[str]


def load_scenario(path: str) -> List[Event]:
    with open(path, "r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ScenarioFormatError(f"{path}: not valid YAML: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("events")
    if data is None:
        return []
    if not isinstance(data, list):
        raise ScenarioFormatError(f"{path}: expected a list of events.")

    events: List[Event] = []
    for number, entry in enumerate(data, start=1):
        if not isinstance(entry, str):
            raise ScenarioFormatError(f"{path}: event {number} must be a string, got {entry!r}")
        try:
            events.append(parse_event(entry))
        except ScenarioFormatError as exc:
            raise ScenarioFormatError(f"{path}: event {number}: {exc}") from exc
    return events


def step_records(timeline: Timeline) -> List[StepRecord]:
    records: List[StepRecord] = []
    for index, step in enumerate(timeline):
        records.append(
            StepRecord(
                index=index,
                label=step.label,
                connected=device_names(step.connected_devices),
                active=step.active.name if step.active else None,
                preference=device_names(step.strategy.preference_order()),
            )
        )
    return records


def save_timeline(path: str, timeline: Timeline) -> None:
    payload = [asdict(record) for record in step_records(timeline)]
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


class TraceFormatError(ValueError):
    """Raised when a timeline trace file does not hold step records."""


def load_timeline(path: str) -> List[StepRecord]:
    with open(path, "r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise TraceFormatError(f"{path}: not valid JSON: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise TraceFormatError(f"{path}: expected a list of step records.")
    try:
        return [
            StepRecord(
                index=int(item.get("index", idx)),
                label=item.get("label", ""),
                connected=list(item.get("connected", [])),
                active=item.get("active"),
                preference=list(item.get("preference", [])),
            )
            for idx, item in enumerate(data)
        ]
    except (TypeError, ValueError) as exc:
        raise TraceFormatError(f"{path}: malformed step record: {exc}") from exc
