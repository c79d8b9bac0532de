"""Tests for the external registration CLI wrapper."""

from __future__ import annotations

import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest

from vestige_init.delegate import SubprocessDelegate, classify_delegate_output
from vestige_init.errors import DelegateError
from vestige_init.outcome import OutcomeStatus


class TestClassify:
    def test_success(self):
        assert classify_delegate_output(0, "Added stdio MCP server") is OutcomeStatus.CONFIGURED

    def test_already_exists_with_nonzero_exit(self):
        assert classify_delegate_output(1, "MCP server vestige already exists in user config") \
            is OutcomeStatus.SKIPPED

    def test_already_exists_with_zero_exit(self):
        assert classify_delegate_output(0, "Already Registered") is OutcomeStatus.SKIPPED

    def test_nonzero_exit(self):
        assert classify_delegate_output(1, "unknown option -s") is OutcomeStatus.FAILED


class TestSubprocessDelegate:
    def test_runs_command_with_timeout(self):
        completed = MagicMock(returncode=0, stdout="Added\n")
        with patch("vestige_init.delegate.subprocess.run", return_value=completed) as run:
            result = SubprocessDelegate(timeout=3).invoke(["claude", "mcp", "add"])
        assert result.outcome is OutcomeStatus.CONFIGURED
        assert result.raw_output == "Added\n"
        assert run.call_args.kwargs["timeout"] == 3
        assert run.call_args.kwargs["stderr"] is subprocess.STDOUT

    def test_timeout_raises_delegate_error(self):
        with patch("vestige_init.delegate.subprocess.run",
                   side_effect=subprocess.TimeoutExpired(cmd="claude", timeout=3)):
            with pytest.raises(DelegateError) as excinfo:
                SubprocessDelegate(timeout=3).invoke(["claude"])
        assert "timed out after 3s" in excinfo.value.message

    def test_missing_executable(self, tmp_path):
        with pytest.raises(DelegateError):
            SubprocessDelegate().invoke([str(tmp_path / "no-such-cli")])

    def test_real_process_output_classified(self):
        script = "import sys; print('server already exists'); sys.exit(1)"
        result = SubprocessDelegate(timeout=30).invoke([sys.executable, "-c", script])
        assert result.outcome is OutcomeStatus.SKIPPED
        assert result.returncode == 1
