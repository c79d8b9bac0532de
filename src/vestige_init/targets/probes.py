"""Detection predicates used by target descriptors.

Each factory returns a zero-argument callable so the check runs at detection
time, not at registry build time.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from vestige_init.host import HostEnvironment

Probe = Callable[[], bool]


def executable(env: HostEnvironment, name: str) -> Probe:
    """True when `name` is on PATH."""
    return lambda: env.which(name) is not None


def exists(*paths: Path) -> Probe:
    """True when any of the paths exists (file, directory or app bundle)."""
    return lambda: any(p.exists() for p in paths)


def on_platform(env: HostEnvironment, *platforms: str) -> Probe:
    return lambda: env.platform in platforms


def any_of(*probes: Probe) -> Probe:
    return lambda: any(probe() for probe in probes)


def all_of(*probes: Probe) -> Probe:
    return lambda: all(probe() for probe in probes)
