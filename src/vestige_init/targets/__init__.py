"""Catalog of supported tools.

New targets are added by:
  1. Creating a module under targets/ exposing `descriptor(env)`
  2. Adding the module to _TARGET_MODULES below (order is report order)
"""

from __future__ import annotations

from vestige_init.host import HostEnvironment
from vestige_init.targets import (
    claude_code,
    claude_desktop,
    cursor,
    jetbrains,
    vscode,
    windsurf,
    xcode,
)
from vestige_init.targets.base import TargetDescriptor, TargetRegistry

_TARGET_MODULES = (
    claude_code,
    claude_desktop,
    cursor,
    vscode,
    xcode,
    jetbrains,
    windsurf,
)


def build_registry(env: HostEnvironment) -> TargetRegistry:
    """Build the registry of all supported targets for this host."""
    return TargetRegistry(module.descriptor(env) for module in _TARGET_MODULES)


__all__ = [
    "TargetDescriptor",
    "TargetRegistry",
    "build_registry",
]
