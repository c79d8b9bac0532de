"""Bring one target's configuration in line with the desired registration."""

from __future__ import annotations

import logging
from pathlib import Path

from vestige_init.delegate import DelegateInvoker
from vestige_init.documents import backup_document, read_document, write_document
from vestige_init.errors import VestigeInitError, WriteError
from vestige_init.logging_setup import target_context
from vestige_init.merge import registration_entry
from vestige_init.outcome import OutcomeStatus, ReconciliationOutcome
from vestige_init.targets.base import TargetDescriptor

logger = logging.getLogger("vestige_init")


def _last_line(output: str) -> str:
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    return lines[-1] if lines else ""


class ConfigReconciler:
    """Idempotently inject the service registration into a target's config.

    Errors are caught per target and reported as FAILED outcomes; nothing
    escapes reconcile().
    """

    def __init__(
        self,
        delegate: DelegateInvoker,
        service_name: str = "vestige",
        dry_run: bool = False,
        backup: bool = True,
    ) -> None:
        self.delegate = delegate
        self.service_name = service_name
        self.dry_run = dry_run
        self.backup = backup

    def reconcile(self, target: TargetDescriptor, binary_path: Path) -> ReconciliationOutcome:
        with target_context(target.key):
            try:
                if target.is_delegate:
                    return self._reconcile_delegate(target, binary_path)
                return self._reconcile_file(target, binary_path)
            except (VestigeInitError, OSError) as exc:
                reason = exc.message if isinstance(exc, VestigeInitError) else str(exc)
                logger.warning("Failed to configure %s: %s", target.name, reason)
                return ReconciliationOutcome.failed(target, reason)

    # --- CLI delegate -------------------------------------------------------

    def _reconcile_delegate(self, target: TargetDescriptor, binary_path: Path) -> ReconciliationOutcome:
        argv = target.delegate_command(self.service_name, binary_path)
        if self.dry_run:
            return ReconciliationOutcome(
                target=target,
                status=OutcomeStatus.CONFIGURED,
                message=f"Would run: {' '.join(argv)}",
            )

        result = self.delegate.invoke(argv)
        if result.outcome is OutcomeStatus.SKIPPED:
            message = "already configured"
        elif result.outcome is OutcomeStatus.FAILED:
            detail = _last_line(result.raw_output) or "no output"
            exit_info = f"exit {result.returncode}" if result.returncode is not None else "failed"
            message = f"'{argv[0]}' {exit_info}: {detail}"
        else:
            message = f"Registered via '{' '.join(argv[:3])}'"
        return ReconciliationOutcome(target=target, status=result.outcome, message=message)

    # --- direct file merge --------------------------------------------------

    def _reconcile_file(self, target: TargetDescriptor, binary_path: Path) -> ReconciliationOutcome:
        path = target.locate_config()
        if path is None:
            return ReconciliationOutcome.failed(target, "no config location on this platform")

        strategy = target.strategy

        if not self.dry_run:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise WriteError(f"could not create {path.parent}: {exc}") from exc

        existed = path.exists()
        document = read_document(path, allow_comments=strategy.allow_comments)
        result = strategy.merge(document, self.service_name, registration_entry(binary_path))

        status = OutcomeStatus.CONFIGURED if result.registered else OutcomeStatus.SKIPPED
        if not result.changed:
            logger.debug("%s already has %s registered", path, self.service_name)
            return ReconciliationOutcome(
                target=target, status=status, message="already configured", config_path=path,
            )

        if self.dry_run:
            return ReconciliationOutcome(
                target=target, status=status, message=f"Would write {path}", config_path=path,
            )

        backup_path = backup_document(path) if (self.backup and existed) else None
        write_document(path, document)
        logger.info("Wrote %s", path)

        message = f"Wrote {path}" if result.registered else "already configured (trust flag re-applied)"
        return ReconciliationOutcome(
            target=target,
            status=status,
            message=message,
            config_path=path,
            backup_path=backup_path,
        )
