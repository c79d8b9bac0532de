"""Sequence binary resolution, detection and reconciliation into one run."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from vestige_init.detector import detect_targets
from vestige_init.errors import BinaryNotFoundError
from vestige_init.outcome import ReconciliationOutcome, RunReport
from vestige_init.reconciler import ConfigReconciler
from vestige_init.reporter import ConsoleReporter
from vestige_init.targets.base import TargetRegistry

logger = logging.getLogger("vestige_init")


def run_init(
    registry: TargetRegistry,
    locate_binary: Callable[[], Path],
    reconciler: ConfigReconciler,
    reporter: ConsoleReporter,
    binary_name: str = "vestige-mcp",
) -> RunReport:
    """Run the installer end to end and return the report.

    Args:
        registry:      targets to consider (already filtered by the caller).
        locate_binary: returns the binary path or raises BinaryNotFoundError;
                       called exactly once, before any target is touched.
        reconciler:    applies the registration to each detected target.
        reporter:      console output.
    """
    report = RunReport()
    reporter.banner()

    # ── Binary ────────────────────────────────────────────────────────────────
    reporter.looking_for_binary(binary_name)
    try:
        report.binary_path = locate_binary()
    except BinaryNotFoundError as exc:
        logger.debug("Binary lookup failed: %s", exc.details)
        reporter.binary_missing(exc.binary, exc.searched)
        return report
    reporter.binary_found(report.binary_path)

    # ── Detection ─────────────────────────────────────────────────────────────
    reporter.scanning()
    report.detected = detect_targets(registry)
    for target in report.detected:
        reporter.found(target)

    if not report.detected:
        reporter.no_targets(registry)
        return report

    # ── Reconciliation ────────────────────────────────────────────────────────
    reporter.configuring(reconciler.dry_run)
    for target in report.detected:
        try:
            outcome = reconciler.reconcile(target, report.binary_path)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error configuring %s", target.name)
            outcome = ReconciliationOutcome.failed(target, f"Error: {exc}")
        report.outcomes.append(outcome)
        reporter.outcome(outcome)

    reporter.summary(report)
    return report
