"""Cursor IDE: ~/.cursor/mcp.json."""

from __future__ import annotations

from vestige_init.host import HostEnvironment
from vestige_init.merge import MergeFormat
from vestige_init.targets import probes
from vestige_init.targets.base import TargetDescriptor


def descriptor(env: HostEnvironment) -> TargetDescriptor:
    cursor_dir = env.home / ".cursor"
    config_path = cursor_dir / "mcp.json"
    if env.is_macos:
        app_installed = probes.exists(env.system_path("Applications", "Cursor.app"))
    else:
        app_installed = probes.exists(cursor_dir)
    return TargetDescriptor(
        key="cursor",
        name="Cursor",
        detect=probes.any_of(app_installed, probes.exists(config_path)),
        config_path=config_path,
        merge_format=MergeFormat.STANDARD_SERVERS,
    )
