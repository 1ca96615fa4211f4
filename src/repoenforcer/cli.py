"""repoenforcer CLI - run the no-repositories rule against an exported chain."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from repoenforcer import __version__
from repoenforcer.host.snapshot import SnapshotRuleHelper
from repoenforcer.rule.config import RuleConfig, ensure_default_rule_config, load_rule_config
from repoenforcer.rule.errors import ChainResolutionError, RepositoryPolicyViolation, RuleConfigError
from repoenforcer.rule.evaluator import ViolationReport, report_to_dict
from repoenforcer.rule.require_no_repositories import RequireNoRepositories
from repoenforcer.utils.canonical_json import canonical_dumps

EXIT_VIOLATION = 1
EXIT_USAGE = 2

cli = typer.Typer(
    name="repoenforcer",
    help="Ban undeclared artifact repositories across a project's configuration chain",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Manage the rule configuration file.")
cli.add_typer(config_app, name="config")
console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show repoenforcer version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Ban undeclared artifact repositories across a project's configuration chain."""


def _load_config_or_exit(project_root: Path, config: Path | None) -> RuleConfig:
    try:
        return load_rule_config(project_root=project_root, config_path=config) or RuleConfig()
    except RuleConfigError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from e


@cli.command()
def check(
    chain: Path = typer.Option(
        ...,
        "--chain",
        help="Resolved configuration chain document (JSON or YAML)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Rule config file (default: REPOENFORCER_CONFIG, then .repoenforcer/rule.* under --project-root)",
    ),
    project_root: Path = typer.Option(
        Path("."),
        "--project-root",
        help="Project root to search for .repoenforcer/",
    ),
    allow_repo: list[str] | None = typer.Option(
        None,
        "--allow-repo",
        help="Allowed repository id (repeatable, added to the config allow-list)",
    ),
    allow_plugin_repo: list[str] | None = typer.Option(
        None,
        "--allow-plugin-repo",
        help="Allowed plugin repository id (repeatable, added to the config allow-list)",
    ),
    allow_snapshots: bool | None = typer.Option(
        None,
        "--allow-snapshots/--no-allow-snapshots",
        help="Tolerate repositories with releases disabled (default: from config)",
    ),
    allow_snapshot_plugins: bool | None = typer.Option(
        None,
        "--allow-snapshot-plugins/--no-allow-snapshot-plugins",
        help="Tolerate plugin repositories with releases disabled (default: from config)",
    ),
    ban_repositories: bool | None = typer.Option(
        None,
        "--ban-repositories/--no-ban-repositories",
        help="Run the release repository check (default: from config)",
    ),
    ban_plugin_repositories: bool | None = typer.Option(
        None,
        "--ban-plugin-repositories/--no-ban-plugin-repositories",
        help="Run the plugin repository check (default: from config)",
    ),
    message: str | None = typer.Option(
        None,
        "--message",
        help="Text appended to the failure message",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the violation report as canonical JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Check a configuration chain for banned repositories."""
    _configure_logging(verbose)

    rule_config = _load_config_or_exit(project_root, config)
    rule_config = rule_config.with_overrides(
        ban_repositories=ban_repositories,
        ban_plugin_repositories=ban_plugin_repositories,
        allowed_repositories=rule_config.allowed_repositories | set(allow_repo) if allow_repo else None,
        allowed_plugin_repositories=(
            rule_config.allowed_plugin_repositories | set(allow_plugin_repo) if allow_plugin_repo else None
        ),
        allow_snapshot_repositories=allow_snapshots,
        allow_snapshot_plugin_repositories=allow_snapshot_plugins,
        message=message,
    )

    rule = RequireNoRepositories(rule_config)
    try:
        rule.execute(SnapshotRuleHelper(chain))
    except ChainResolutionError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from e
    except RepositoryPolicyViolation as e:
        if json_output:
            typer.echo(canonical_dumps(report_to_dict(e.report, rule.message)))
        else:
            console.print(f"[bold red]✗ {e.reason_code}[/bold red]")
            console.print(str(e), markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(EXIT_VIOLATION) from e

    if json_output:
        typer.echo(canonical_dumps(report_to_dict(ViolationReport())))
    else:
        console.print("[green]✓ No banned repositories found[/green]")


@config_app.command("init")
def config_init(
    project_root: Path = typer.Option(
        Path("."),
        "--project-root",
        help="Project root to write .repoenforcer/rule.yaml under",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing rule config",
    ),
) -> None:
    """Write the default rule config."""
    try:
        output_path = ensure_default_rule_config(project_root, force=force)
    except FileExistsError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        err_console.print("Use --force to overwrite.")
        raise typer.Exit(EXIT_USAGE) from e
    console.print(f"[green]✓ Wrote {output_path}[/green]")


@config_app.command("show")
def config_show(
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Rule config file",
    ),
    project_root: Path = typer.Option(
        Path("."),
        "--project-root",
        help="Project root to search for .repoenforcer/",
    ),
) -> None:
    """Print the effective rule config as canonical JSON."""
    rule_config = _load_config_or_exit(project_root, config)
    typer.echo(canonical_dumps(rule_config.to_dict()))


if __name__ == "__main__":
    cli()
