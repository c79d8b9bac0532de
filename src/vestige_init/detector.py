"""Target detection engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vestige_init.errors import DetectionError
from vestige_init.targets.base import TargetDescriptor, TargetRegistry

logger = logging.getLogger("vestige_init")


@dataclass
class DetectionResult:
    """Result of probing the system for one target."""

    target: TargetDescriptor
    installed: bool
    error: DetectionError | None = None


def scan_targets(registry: TargetRegistry) -> list[DetectionResult]:
    """Run detection on every target, in registry order.

    Includes non-installed targets so callers can show a full inventory.
    """
    results: list[DetectionResult] = []
    for target in registry:
        try:
            installed = bool(target.detect())
        except Exception as exc:  # noqa: BLE001
            # Fail closed: detection errors become "not installed"
            error = DetectionError(
                f"Detection error for {target.name}: {exc}",
                details={"target": target.key},
            )
            logger.debug("%s", error.message)
            results.append(DetectionResult(target=target, installed=False, error=error))
            continue
        results.append(DetectionResult(target=target, installed=installed))
    return results


def detect_targets(registry: TargetRegistry) -> list[TargetDescriptor]:
    """Return the installed targets, preserving registry order."""
    return [r.target for r in scan_targets(registry) if r.installed]
