"""JetBrains IDEs via the Junie agent, which reads ~/.junie/mcp/mcp.json."""

from __future__ import annotations

from vestige_init.host import HostEnvironment
from vestige_init.merge import MergeFormat
from vestige_init.targets import probes
from vestige_init.targets.base import TargetDescriptor


def descriptor(env: HostEnvironment) -> TargetDescriptor:
    if env.is_macos:
        jetbrains_dir = env.home / "Library" / "Application Support" / "JetBrains"
    else:
        jetbrains_dir = env.home / ".config" / "JetBrains"
    return TargetDescriptor(
        key="jetbrains",
        name="JetBrains (Junie)",
        detect=probes.exists(jetbrains_dir),
        config_path=env.home / ".junie" / "mcp" / "mcp.json",
        merge_format=MergeFormat.STANDARD_SERVERS,
    )
