"""Registration through a tool's own CLI instead of editing its files."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

from vestige_init.errors import DelegateError
from vestige_init.outcome import OutcomeStatus

logger = logging.getLogger("vestige_init")

# Substrings the delegate prints when the server is already registered
_ALREADY_PRESENT_MARKERS = ("already exists", "already registered")


@dataclass(frozen=True)
class DelegateResult:
    outcome: OutcomeStatus
    raw_output: str
    returncode: int | None = None


class DelegateInvoker(Protocol):
    def invoke(self, argv: Sequence[str]) -> DelegateResult: ...


def classify_delegate_output(returncode: int, output: str) -> OutcomeStatus:
    """An "already exists" message wins over the exit code; otherwise exit 0 means done."""
    lowered = output.lower()
    if any(marker in lowered for marker in _ALREADY_PRESENT_MARKERS):
        return OutcomeStatus.SKIPPED
    if returncode != 0:
        return OutcomeStatus.FAILED
    return OutcomeStatus.CONFIGURED


class SubprocessDelegate:
    """Run the registration command as a child process with a timeout."""

    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout

    def invoke(self, argv: Sequence[str]) -> DelegateResult:
        logger.debug("Running %s", " ".join(argv))
        try:
            result = subprocess.run(
                list(argv),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise DelegateError(
                f"'{argv[0]}' timed out after {self.timeout:g}s",
                details={"argv": list(argv)},
            ) from exc
        except OSError as exc:
            raise DelegateError(
                f"could not run '{argv[0]}': {exc}",
                details={"argv": list(argv)},
            ) from exc

        output = result.stdout or ""
        return DelegateResult(
            outcome=classify_delegate_output(result.returncode, output),
            raw_output=output,
            returncode=result.returncode,
        )
