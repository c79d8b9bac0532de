"""Xcode 26.3 coding assistant, which runs a Claude agent with its own .claude file."""

from __future__ import annotations

from vestige_init.host import HostEnvironment
from vestige_init.merge import MergeFormat
from vestige_init.targets import probes
from vestige_init.targets.base import TargetDescriptor


def descriptor(env: HostEnvironment) -> TargetDescriptor:
    developer_dir = env.home / "Library" / "Developer" / "Xcode"
    detect = probes.all_of(
        probes.on_platform(env, "darwin"),
        probes.exists(env.system_path("Applications", "Xcode.app"), developer_dir),
    )
    return TargetDescriptor(
        key="xcode",
        name="Xcode 26.3",
        detect=detect,
        config_path=developer_dir / "CodingAssistant" / "ClaudeAgentConfig" / ".claude",
        merge_format=MergeFormat.PROJECT_WILDCARD,
    )
