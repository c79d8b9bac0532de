"""Snapshot of the machine that detection and path resolution run against."""

from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping

MACOS = "darwin"
WINDOWS = "win32"
LINUX = "linux"


def _normalize_platform(raw: str) -> str:
    if raw.startswith("linux"):
        return LINUX
    return raw


@dataclass(frozen=True)
class HostEnvironment:
    """Immutable view of home directory, filesystem root, platform and PATH.

    Absolute system locations such as /Applications or /usr/local/bin are built
    from `root`, so tests can point everything at a temporary directory.
    """

    home: Path
    platform: str
    environ: Mapping[str, str] = field(default_factory=dict)
    which: Callable[[str], str | None] = shutil.which
    root: Path = Path("/")

    @classmethod
    def current(cls) -> HostEnvironment:
        return cls(
            home=Path.home(),
            platform=_normalize_platform(sys.platform),
            environ=dict(os.environ),
            which=shutil.which,
            root=Path(os.path.abspath(os.sep)),
        )

    @property
    def is_macos(self) -> bool:
        return self.platform == MACOS

    @property
    def is_windows(self) -> bool:
        return self.platform == WINDOWS

    def system_path(self, *parts: str) -> Path:
        """Absolute path below the filesystem root, e.g. /Applications/Xcode.app."""
        return self.root.joinpath(*parts)

    def app_support_dir(self) -> Path:
        """Per-user application data directory for the current platform.

        macOS: ~/Library/Application Support
        Windows: %APPDATA% (falls back to ~/AppData/Roaming)
        Linux: ~/.config
        """
        if self.is_macos:
            return self.home / "Library" / "Application Support"
        if self.is_windows:
            appdata = self.environ.get("APPDATA")
            return Path(appdata) if appdata else self.home / "AppData" / "Roaming"
        return self.home / ".config"
