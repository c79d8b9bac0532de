"""Read-only checks of whether a target already carries the registration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from vestige_init.detector import scan_targets
from vestige_init.documents import parse_document, read_text
from vestige_init.errors import ParseError
from vestige_init.merge import MergeFormat, MergeStrategy, strategy_for
from vestige_init.targets.base import TargetDescriptor, TargetRegistry


@dataclass
class TargetStatus:
    target: TargetDescriptor
    installed: bool
    registered: bool
    detail: str


def registration_present(target: TargetDescriptor, service_name: str) -> tuple[bool, str]:
    """Return (registered, detail) for a target without modifying anything.

    Delegate targets are checked in the file their CLI writes, which keeps a
    plain mcpServers map.
    """
    path = target.locate_config()
    if path is None:
        return False, "No config location on this platform"
    if target.is_delegate:
        strategy = strategy_for(MergeFormat.STANDARD_SERVERS)
    else:
        strategy = target.strategy
    return _check_document(path, strategy, service_name)


def _check_document(path: Path, strategy: MergeStrategy, service_name: str) -> tuple[bool, str]:
    try:
        raw = read_text(path)
    except FileNotFoundError:
        return False, f"{path} does not exist"
    except OSError as exc:
        return False, f"Cannot read {path}: {exc}"
    except ParseError as exc:
        return False, f"Invalid config: {exc.message}"
    try:
        document = parse_document(raw, allow_comments=strategy.allow_comments)
        entry = strategy.lookup(document, service_name)
    except ParseError as exc:
        return False, f"Invalid config: {exc.message}"
    if not entry:
        return False, f"No '{service_name}' entry in {path}"
    return True, f"Configured in {path}"


def collect_status(registry: TargetRegistry, service_name: str) -> list[TargetStatus]:
    statuses: list[TargetStatus] = []
    for result in scan_targets(registry):
        registered, detail = registration_present(result.target, service_name)
        statuses.append(
            TargetStatus(
                target=result.target,
                installed=result.installed,
                registered=registered,
                detail=detail,
            )
        )
    return statuses
