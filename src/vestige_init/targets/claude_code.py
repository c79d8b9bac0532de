"""Claude Code registers MCP servers through its own `claude mcp add` command."""

from __future__ import annotations

from vestige_init.host import HostEnvironment
from vestige_init.merge import MergeFormat
from vestige_init.targets import probes
from vestige_init.targets.base import TargetDescriptor


def descriptor(env: HostEnvironment) -> TargetDescriptor:
    return TargetDescriptor(
        key="claude-code",
        name="Claude Code",
        detect=probes.executable(env, "claude"),
        # Written by `claude mcp add -s user`; read only by `status`
        config_path=env.home / ".claude.json",
        merge_format=MergeFormat.CLI_DELEGATE,
        delegate_argv=("claude", "mcp", "add", "{name}", "{binary}", "-s", "user"),
    )
