"""VS Code (Copilot agent mode) reads MCP servers from the user settings.json.

settings.json holds the user's whole editor configuration and is commonly
written with comments, so it is parsed as JSONC.
"""

from __future__ import annotations

from vestige_init.host import HostEnvironment
from vestige_init.merge import MergeFormat
from vestige_init.targets import probes
from vestige_init.targets.base import TargetDescriptor

_PROJECT_TIP = (
    'Tip: For project-level config, create .vscode/mcp.json with {"servers": {"vestige": ...}}'
)


def descriptor(env: HostEnvironment) -> TargetDescriptor:
    detect = probes.any_of(
        probes.executable(env, "code"),
        probes.all_of(
            probes.on_platform(env, "darwin"),
            probes.exists(env.system_path("Applications", "Visual Studio Code.app")),
        ),
    )
    return TargetDescriptor(
        key="vscode",
        name="VS Code (Copilot)",
        detect=detect,
        config_path=env.app_support_dir() / "Code" / "User" / "settings.json",
        merge_format=MergeFormat.EDITOR_SETTINGS_NESTED,
        note=_PROJECT_TIP,
    )
