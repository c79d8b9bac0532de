"""Shared pytest fixtures for the vestige-init test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from vestige_init.delegate import DelegateResult
from vestige_init.host import HostEnvironment
from vestige_init.outcome import OutcomeStatus


class FakePath:
    """Stand-in for shutil.which backed by a dict of name -> path."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self.entries = dict(entries or {})

    def __call__(self, name: str) -> str | None:
        return self.entries.get(name)


class StubDelegate:
    """Records delegate invocations and returns a canned result."""

    def __init__(self, outcome: OutcomeStatus = OutcomeStatus.CONFIGURED, output: str = "",
                 returncode: int | None = 0) -> None:
        self.result = DelegateResult(outcome=outcome, raw_output=output, returncode=returncode)
        self.calls: list[list[str]] = []

    def invoke(self, argv):  # noqa: ANN001
        self.calls.append(list(argv))
        return self.result


def make_host(tmp_path: Path, platform: str = "linux", which: FakePath | None = None,
              environ: dict[str, str] | None = None) -> HostEnvironment:
    home = tmp_path / "home"
    root = tmp_path / "root"
    home.mkdir(exist_ok=True)
    root.mkdir(exist_ok=True)
    return HostEnvironment(
        home=home,
        platform=platform,
        environ=environ or {},
        which=which or FakePath(),
        root=root,
    )


@pytest.fixture
def fake_path():
    return FakePath()


@pytest.fixture
def host(tmp_path, fake_path):
    """Linux host rooted in tmp_path with an empty PATH."""
    return make_host(tmp_path, which=fake_path)


@pytest.fixture
def mac_host(tmp_path, fake_path):
    return make_host(tmp_path, platform="darwin", which=fake_path)


@pytest.fixture
def stub_delegate():
    return StubDelegate()


@pytest.fixture
def binary(tmp_path):
    """An existing vestige-mcp binary on disk."""
    path = tmp_path / "bin" / "vestige-mcp"
    path.parent.mkdir(parents=True)
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path
