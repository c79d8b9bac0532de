"""vestige-init CLI - connect AI coding tools to the Vestige MCP server."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from vestige_init.binary import BinaryResolver, validate_binary
from vestige_init.config import (
    Config,
    get_config_path,
    get_config_value,
    load_config,
    set_config_value,
)
from vestige_init.delegate import SubprocessDelegate
from vestige_init.host import HostEnvironment
from vestige_init.logging_setup import setup_logging
from vestige_init.orchestrator import run_init
from vestige_init.reconciler import ConfigReconciler
from vestige_init.reporter import ConsoleReporter
from vestige_init.targets import build_registry

app = typer.Typer(
    name="vestige-init",
    help="Give your AI a brain: register vestige-mcp with every AI coding tool on this machine.",
    no_args_is_help=False,
)
config_app = typer.Typer(help="Manage vestige-init configuration")
app.add_typer(config_app, name="config")

console = Console(highlight=False)

_config: Config | None = None


def _get_config() -> Config:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def _set_config_value(key: str, value: str) -> Config:
    global _config
    _config = set_config_value(key, value)
    return _config


def _host() -> HostEnvironment:
    return HostEnvironment.current()


def _delegate(config: Config) -> SubprocessDelegate:
    return SubprocessDelegate(timeout=config.delegate.timeout)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False, "--dry-run",
        help="Show what would change without writing any files or running tool CLIs.",
    ),
    targets: Optional[list[str]] = typer.Option(
        None, "--target", "-t",
        help="Only configure these targets (repeatable), e.g. -t cursor -t vscode.",
    ),
    binary: Optional[Path] = typer.Option(
        None, "--binary",
        help="Use this vestige-mcp binary instead of searching for one.",
    ),
    no_backup: bool = typer.Option(
        False, "--no-backup",
        help="Do not keep a .bak copy of config files before changing them.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
):
    """Detect installed AI tools and register vestige-mcp with each of them."""
    cfg = _get_config()
    setup_logging(cfg, verbose=verbose)

    if ctx.invoked_subcommand is not None:
        return

    env = _host()
    registry = build_registry(env)
    if targets:
        try:
            registry = registry.select(targets)
        except KeyError as exc:
            console.print(f"[red]Unknown target(s):[/red] {exc.args[0]}")
            console.print(f"Known targets: {', '.join(build_registry(env).keys())}")
            raise typer.Exit(code=1)

    if binary is not None:
        locate_binary = lambda: validate_binary(binary)  # noqa: E731
    else:
        locate_binary = BinaryResolver(
            env,
            binary_name=cfg.service.binary,
            extra_dirs=cfg.service.extra_dirs,
        ).require

    reconciler = ConfigReconciler(
        delegate=_delegate(cfg),
        service_name=cfg.service.name,
        dry_run=dry_run,
        backup=cfg.write.backup and not no_backup,
    )
    report = run_init(
        registry,
        locate_binary,
        reconciler,
        ConsoleReporter(console),
        binary_name=cfg.service.binary,
    )
    raise typer.Exit(code=report.exit_code)


@app.command()
def status():
    """Show which tools are detected and which already have Vestige registered."""
    from vestige_init.verifier import collect_status

    cfg = _get_config()
    statuses = collect_status(build_registry(_host()), cfg.service.name)
    ConsoleReporter(console).status_table(statuses)


# Register commands from sub-modules
from vestige_init.cli import config_cmd as _config_cmd_mod  # noqa: E402

_config_cmd_mod.register(
    config_app,
    _get_config,
    get_config_path,
    get_config_value,
    _set_config_value,
)

if __name__ == "__main__":
    app()
