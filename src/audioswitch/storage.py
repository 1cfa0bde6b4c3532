"""Storage and naming utilities."""

from __future__ import annotations

import os
from datetime import datetime


def timestamp_slug(dt: datetime | None = None) -> str:
    now = dt or datetime.now()
    return now.strftime("%Y-%m-%d_%H%M%S")


def build_trace_basename(title: str, dt: datetime | None = None) -> str:
    slug = title.strip().replace(" ", "-") if title else "Timeline"
    return f"{timestamp_slug(dt)}--{slug}"


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def trace_path(out_dir: str, title: str, dt: datetime | None = None) -> str:
    ensure_dir(out_dir)
    return os.path.join(out_dir, f"{build_trace_basename(title, dt)}.timeline.json")
