"""Timeline events and event-line parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScenarioFormatError(ValueError):
    """Raised when an event line or scenario file cannot be understood."""


class EventType(str, Enum):
    """User or environment events that move a timeline forward."""

    PLUG = "plug"
    UNPLUG = "unplug"
    SELECT = "select"
    # Rewind to an earlier step; the next event overwrites what follows it.
    GOTO = "goto"


@dataclass(frozen=True)
class Event:
    type: EventType
    device: Optional[str] = None
    index: Optional[int] = None

    def describe(self) -> str:
        if self.type == EventType.GOTO:
            return f"goto {self.index}"
        return f"{self.type.value} {self.device}"


def parse_event(text: str) -> Event:
    """
    Parse a single event line such as "plug USB 1" or "goto 2".

    The verb is case-insensitive; the rest of the line is the device query.
    """
    parts = (text or "").strip().split(None, 1)
    if not parts:
        raise ScenarioFormatError("Empty event.")

    verb = parts[0].lower()
    arg = parts[1].strip() if len(parts) > 1 else ""
    try:
        event_type = EventType(verb)
    except ValueError as exc:
        verbs = ", ".join(t.value for t in EventType)
        raise ScenarioFormatError(f"Unknown event {parts[0]!r}. Expected one of: {verbs}") from exc

    if not arg:
        raise ScenarioFormatError(f"Event {verb!r} needs an argument.")

    if event_type == EventType.GOTO:
        try:
            index = int(arg)
        except ValueError as exc:
            raise ScenarioFormatError(f"goto expects a step number, got {arg!r}") from exc
        if index < 0:
            raise ScenarioFormatError(f"goto expects a non-negative step number, got {index}")
        return Event(type=event_type, index=index)

    return Event(type=event_type, device=arg)
