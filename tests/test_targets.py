"""Tests for the target registry, its descriptors, and detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import make_host
from vestige_init.detector import detect_targets, scan_targets
from vestige_init.errors import DetectionError
from vestige_init.merge import MergeFormat
from vestige_init.targets import build_registry
from vestige_init.targets.base import TargetDescriptor, TargetRegistry


def _target(key: str, name: str | None = None, detect=lambda: True, **kwargs) -> TargetDescriptor:  # noqa: ANN001
    kwargs.setdefault("config_path", Path("/tmp") / f"{key}.json")
    kwargs.setdefault("merge_format", MergeFormat.STANDARD_SERVERS)
    return TargetDescriptor(key=key, name=name or key.title(), detect=detect, **kwargs)


class TestRegistry:
    def test_builtin_targets_in_order(self, host):
        registry = build_registry(host)
        assert registry.keys() == [
            "claude-code",
            "claude-desktop",
            "cursor",
            "vscode",
            "xcode",
            "jetbrains",
            "windsurf",
        ]

    def test_formats(self, host):
        registry = build_registry(host)
        formats = {t.key: t.merge_format for t in registry}
        assert formats["claude-code"] is MergeFormat.CLI_DELEGATE
        assert formats["vscode"] is MergeFormat.EDITOR_SETTINGS_NESTED
        assert formats["xcode"] is MergeFormat.PROJECT_WILDCARD
        for key in ("claude-desktop", "cursor", "jetbrains", "windsurf"):
            assert formats[key] is MergeFormat.STANDARD_SERVERS

    def test_duplicate_key_rejected(self):
        with pytest.raises(ValueError):
            TargetRegistry([_target("a"), _target("a", name="Other")])

    def test_duplicate_name_rejected(self):
        with pytest.raises(ValueError):
            TargetRegistry([_target("a", name="Same"), _target("b", name="Same")])

    def test_delegate_needs_command(self):
        with pytest.raises(ValueError):
            TargetRegistry([_target("a", merge_format=MergeFormat.CLI_DELEGATE)])

    def test_select_keeps_registry_order(self, host):
        registry = build_registry(host).select(["windsurf", "cursor"])
        assert registry.keys() == ["cursor", "windsurf"]

    def test_select_unknown(self, host):
        with pytest.raises(KeyError):
            build_registry(host).select(["emacs"])

    def test_lookup(self, host):
        registry = build_registry(host)
        assert "cursor" in registry.keys()
        assert registry.get("cursor").name == "Cursor"
        assert registry.get("nano") is None
        assert len(registry) == 7

    def test_delegate_command(self, host):
        claude = build_registry(host).get("claude-code")
        assert claude.delegate_command("vestige", "/bin/vestige-mcp") == [
            "claude", "mcp", "add", "vestige", "/bin/vestige-mcp", "-s", "user",
        ]


class TestConfigPaths:
    def test_linux(self, host):
        registry = build_registry(host)
        home = host.home
        assert registry.get("claude-desktop").locate_config() == (
            home / ".config" / "Claude" / "claude_desktop_config.json"
        )
        assert registry.get("vscode").locate_config() == home / ".config" / "Code" / "User" / "settings.json"
        assert registry.get("cursor").locate_config() == home / ".cursor" / "mcp.json"
        assert registry.get("jetbrains").locate_config() == home / ".junie" / "mcp" / "mcp.json"
        assert registry.get("windsurf").locate_config() == home / ".codeium" / "windsurf" / "mcp_config.json"

    def test_macos(self, mac_host):
        registry = build_registry(mac_host)
        support = mac_host.home / "Library" / "Application Support"
        assert registry.get("claude-desktop").locate_config() == (
            support / "Claude" / "claude_desktop_config.json"
        )
        assert registry.get("xcode").locate_config() == (
            mac_host.home / "Library" / "Developer" / "Xcode" / "CodingAssistant"
            / "ClaudeAgentConfig" / ".claude"
        )

    def test_windows_appdata(self, tmp_path):
        host = make_host(tmp_path, platform="win32", environ={"APPDATA": str(tmp_path / "roaming")})
        registry = build_registry(host)
        assert registry.get("claude-desktop").locate_config() == (
            tmp_path / "roaming" / "Claude" / "claude_desktop_config.json"
        )

    def test_windows_without_appdata(self, tmp_path):
        host = make_host(tmp_path, platform="win32")
        assert build_registry(host).get("vscode").locate_config() == (
            host.home / "AppData" / "Roaming" / "Code" / "User" / "settings.json"
        )


class TestDetection:
    def test_nothing_installed(self, host):
        assert detect_targets(build_registry(host)) == []

    def test_claude_code_via_path(self, host, fake_path):
        fake_path.entries["claude"] = "/usr/bin/claude"
        assert [t.key for t in detect_targets(build_registry(host))] == ["claude-code"]

    def test_vscode_via_path(self, host, fake_path):
        fake_path.entries["code"] = "/usr/bin/code"
        assert [t.key for t in detect_targets(build_registry(host))] == ["vscode"]

    def test_claude_desktop_needs_config_file(self, host):
        config = build_registry(host).get("claude-desktop").locate_config()
        config.parent.mkdir(parents=True)
        assert detect_targets(build_registry(host)) == []
        config.write_text("{}")
        assert [t.key for t in detect_targets(build_registry(host))] == ["claude-desktop"]

    def test_cursor_dir_on_linux(self, host):
        (host.home / ".cursor").mkdir()
        assert [t.key for t in detect_targets(build_registry(host))] == ["cursor"]

    def test_macos_app_bundles(self, mac_host):
        for bundle in ("Cursor.app", "Visual Studio Code.app", "Xcode.app", "Windsurf.app"):
            (mac_host.root / "Applications" / bundle).mkdir(parents=True)
        keys = [t.key for t in detect_targets(build_registry(mac_host))]
        assert keys == ["cursor", "vscode", "xcode", "windsurf"]

    def test_app_bundles_ignored_off_macos(self, host):
        for bundle in ("Visual Studio Code.app", "Xcode.app", "Windsurf.app"):
            (host.root / "Applications" / bundle).mkdir(parents=True)
        (host.home / "Library" / "Developer" / "Xcode").mkdir(parents=True)
        assert detect_targets(build_registry(host)) == []

    def test_jetbrains(self, host):
        (host.home / ".config" / "JetBrains").mkdir(parents=True)
        assert [t.key for t in detect_targets(build_registry(host))] == ["jetbrains"]

    def test_detection_independent_of_configuration(self, host):
        windsurf = build_registry(host).get("windsurf")
        windsurf.locate_config().parent.mkdir(parents=True)
        windsurf.locate_config().write_text('{"mcpServers": {"vestige": {"command": "x"}}}')
        assert [t.key for t in detect_targets(build_registry(host))] == ["windsurf"]

    def test_failing_probe_is_not_detected(self):
        def boom() -> bool:
            raise PermissionError("denied")

        registry = TargetRegistry([_target("a", detect=boom), _target("b")])
        results = scan_targets(registry)
        assert [r.installed for r in results] == [False, True]
        assert isinstance(results[0].error, DetectionError)
        assert "denied" in results[0].error.message
        assert [t.key for t in detect_targets(registry)] == ["b"]

    def test_scan_lists_every_target(self, host):
        results = scan_targets(build_registry(host))
        assert len(results) == 7
        assert not any(r.installed for r in results)
