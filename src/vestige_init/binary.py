"""Locate the vestige-mcp binary through a prioritized fallback chain."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from vestige_init.errors import BinaryNotFoundError
from vestige_init.host import HostEnvironment

logger = logging.getLogger("vestige_init")

_NPM_TIMEOUT_S = 5


def npm_global_prefix(env: HostEnvironment, timeout: float = _NPM_TIMEOUT_S) -> str | None:
    """Return `npm prefix -g`, or None when npm is missing or misbehaves."""
    npm = env.which("npm")
    if not npm:
        return None
    try:
        result = subprocess.run(
            [npm, "prefix", "-g"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("npm prefix lookup failed: %s", exc)
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


class BinaryResolver:
    """Find the service binary.

    Candidates are tried in this order:
        1. PATH lookup
        2. /usr/local/bin               (system-wide)
        3. ~/.cargo/bin                 (user-local package bin)
        4. <npm prefix -g>/bin          (package-manager global; the .cmd
                                         shim in the prefix on Windows)
        5. configured extra directories

    The first candidate that exists as a file wins. Only reads are performed.
    """

    def __init__(
        self,
        env: HostEnvironment,
        binary_name: str = "vestige-mcp",
        extra_dirs: Sequence[str | Path] = (),
        npm_prefix: Callable[[], str | None] | None = None,
    ) -> None:
        self.env = env
        self.binary_name = binary_name
        self.extra_dirs = [Path(os.path.expanduser(str(d))) for d in extra_dirs]
        self._npm_prefix = npm_prefix or (lambda: npm_global_prefix(env))
        self.searched: list[Path] = []

    @property
    def _filename(self) -> str:
        if self.env.is_windows and not self.binary_name.lower().endswith(".exe"):
            return f"{self.binary_name}.exe"
        return self.binary_name

    def candidates(self) -> list[Path]:
        """Return the ordered, de-duplicated candidate list."""
        found: list[Path] = []

        on_path = self.env.which(self.binary_name)
        if on_path:
            found.append(Path(on_path))

        found.append(self.env.system_path("usr", "local", "bin", self._filename))
        found.append(self.env.home / ".cargo" / "bin" / self._filename)

        prefix = self._npm_prefix()
        if prefix:
            # npm puts .cmd shims directly in the prefix on Windows
            if self.env.is_windows:
                found.append(Path(prefix) / f"{self.binary_name}.cmd")
            else:
                found.append(Path(prefix) / "bin" / self.binary_name)

        found.extend(d / self._filename for d in self.extra_dirs)

        unique: list[Path] = []
        for candidate in found:
            if candidate not in unique:
                unique.append(candidate)
        return unique

    def resolve(self) -> Path | None:
        """Return the absolute path of the first existing candidate, or None."""
        self.searched = self.candidates()
        for candidate in self.searched:
            if candidate.is_file():
                logger.debug("Resolved %s at %s", self.binary_name, candidate)
                return Path(os.path.abspath(candidate))
            logger.debug("No %s at %s", self.binary_name, candidate)
        return None

    def require(self) -> Path:
        """Like resolve(), but raise BinaryNotFoundError listing what was searched."""
        path = self.resolve()
        if path is None:
            raise BinaryNotFoundError(self.binary_name, [str(c) for c in self.searched])
        return path


def validate_binary(path: str | Path) -> Path:
    """Validate an explicitly supplied binary path."""
    candidate = Path(os.path.expanduser(str(path)))
    if not candidate.is_file():
        raise BinaryNotFoundError(candidate.name, [str(candidate)])
    return Path(os.path.abspath(candidate))
