"""Windsurf (Codeium) IDE."""

from __future__ import annotations

from vestige_init.host import HostEnvironment
from vestige_init.merge import MergeFormat
from vestige_init.targets import probes
from vestige_init.targets.base import TargetDescriptor


def descriptor(env: HostEnvironment) -> TargetDescriptor:
    config_path = env.home / ".codeium" / "windsurf" / "mcp_config.json"
    detect = probes.any_of(
        probes.exists(config_path),
        probes.all_of(
            probes.on_platform(env, "darwin"),
            probes.exists(env.system_path("Applications", "Windsurf.app")),
        ),
    )
    return TargetDescriptor(
        key="windsurf",
        name="Windsurf",
        detect=detect,
        config_path=config_path,
        merge_format=MergeFormat.STANDARD_SERVERS,
    )
