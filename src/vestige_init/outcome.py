"""Per-target reconciliation outcomes and the run report."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vestige_init.targets.base import TargetDescriptor


class OutcomeStatus(str, Enum):
    CONFIGURED = "configured"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ReconciliationOutcome:
    """Result of reconciling one target. Reported, never persisted."""

    target: TargetDescriptor
    status: OutcomeStatus
    message: str
    config_path: Path | None = None
    backup_path: Path | None = None

    @classmethod
    def failed(cls, target: TargetDescriptor, reason: str) -> ReconciliationOutcome:
        return cls(target=target, status=OutcomeStatus.FAILED, message=reason,
                   config_path=target.locate_config())


@dataclass
class RunReport:
    binary_path: Path | None = None
    detected: list[TargetDescriptor] = field(default_factory=list)
    outcomes: list[ReconciliationOutcome] = field(default_factory=list)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def configured(self) -> int:
        return self.count(OutcomeStatus.CONFIGURED)

    @property
    def skipped(self) -> int:
        return self.count(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(OutcomeStatus.FAILED)

    @property
    def exit_code(self) -> int:
        """0 when the binary was found and at least one target detected.

        Individual target failures do not change the exit code.
        """
        if self.binary_path is None or not self.detected:
            return 1
        return 0
