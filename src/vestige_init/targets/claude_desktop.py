"""Claude Desktop keeps a plain mcpServers map in claude_desktop_config.json."""

from __future__ import annotations

from vestige_init.host import HostEnvironment
from vestige_init.merge import MergeFormat
from vestige_init.targets import probes
from vestige_init.targets.base import TargetDescriptor


def descriptor(env: HostEnvironment) -> TargetDescriptor:
    config_path = env.app_support_dir() / "Claude" / "claude_desktop_config.json"
    return TargetDescriptor(
        key="claude-desktop",
        name="Claude Desktop",
        detect=probes.exists(config_path),
        config_path=config_path,
        merge_format=MergeFormat.STANDARD_SERVERS,
    )
