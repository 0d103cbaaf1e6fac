"""
toolspec — CLI entrypoint.

Usage:
    python -m toolspec.main --help
    python -m toolspec.main resolve portable -- --some-flag "arg with space"
    python -m toolspec.main paths dotnet-portable 1.0.0 netcoreapp2.2
    python -m toolspec.main config show
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from toolspec import __version__
from toolspec.core.observability.logging_config import LogSettings, setup_logging
from toolspec.ui.cli.config import config, load_cli_config


@click.group()
@click.version_option(version=__version__, prog_name="toolspec")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to toolspec.yml (default: auto-detect).",
)
@click.option("--host-path", default=None, help="Shared host launcher (overrides DOTNET_HOST_PATH).")
@click.option("--packages", "packages", default=None, help="Global packages folder.")
@click.option(
    "--fallback-folder",
    "fallback_folders",
    multiple=True,
    help="Fallback package folder (repeatable, searched in order).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    host_path: str | None,
    packages: str | None,
    fallback_folders: tuple[str, ...],
) -> None:
    """toolspec — resolve project tool commands into runnable process specs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["overrides"] = {
        "host_path": host_path,
        "global_packages_folder": packages,
        "fallback_folders": list(fallback_folders) if fallback_folders else None,
    }

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        LogSettings.from_cli(debug=debug, verbose=verbose, quiet=quiet, environ=os.environ)
    )


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("command_name")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--project-dir",
    "-p",
    type=click.Path(file_okay=False),
    default=None,
    help="Project directory (default: current directory).",
)
@click.option("--no-path", is_flag=True, help="Only consider project tools, not PATH.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def resolve(
    ctx: click.Context,
    command_name: str,
    arguments: tuple[str, ...],
    project_dir: str | None,
    no_path: bool,
    as_json: bool,
) -> None:
    """Resolve COMMAND_NAME to the process that would run it.

    Examples:

        toolspec resolve portable

        toolspec resolve -p src/app portable -- --flag "arg with space"
    """
    from toolspec.core.use_cases.resolve import resolve_command

    project_path = Path(project_dir).resolve() if project_dir else Path.cwd()
    cfg = load_cli_config(ctx, start_dir=project_path)

    result = resolve_command(
        command_name,
        list(arguments),
        project_path,
        cfg,
        include_path=not no_path,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    spec = result.spec
    assert spec is not None

    if ctx.obj.get("quiet"):
        click.echo(f"{spec.path} {spec.args_string}".rstrip())
        return

    click.secho(f"\n🔧 {command_name}", fg="cyan", bold=True)
    click.echo(f"   Resolver:   {spec.resolver}")
    click.echo(f"   Executable: {spec.path}")
    click.echo("   Arguments:")
    for arg in spec.args:
        click.echo(f"     {arg}")
    click.echo()


@cli.command()
@click.argument("package_id")
@click.argument("version")
@click.argument("framework")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def paths(
    ctx: click.Context,
    package_id: str,
    version: str,
    framework: str,
    as_json: bool,
) -> None:
    """Show where a tool's package, lock data and manifest live."""
    from toolspec.core.services.tool_paths import ToolPathCalculator

    cfg = load_cli_config(ctx)
    calculator = ToolPathCalculator(cfg.global_packages_folder)
    tool_paths = calculator.get_paths(package_id, version, framework, cfg.package_roots())

    if as_json:
        click.echo(json.dumps(tool_paths.model_dump(mode="json"), indent=2))
        return

    click.secho(f"\n📦 {package_id} {version} ({framework})", fg="cyan", bold=True)
    click.echo(f"   Lock file: {tool_paths.lock_file_path}")
    click.echo(f"   Manifest:  {tool_paths.manifest_path}")
    click.echo("   Package directories (search order):")
    for directory in tool_paths.package_directories:
        marker = " ✓" if Path(directory).is_dir() else ""
        click.echo(f"     • {directory}{marker}")
    click.echo()


cli.add_command(config)


def main() -> None:
    """Entry point for ``python -m toolspec.main``."""
    cli(obj={})


if __name__ == "__main__":
    main()
