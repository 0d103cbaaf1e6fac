"""
CLI commands for resolver configuration.

Also home of ``load_cli_config``, the one place the CLI turns
``--config``, toolspec.yml and the process environment into a
ResolverConfig.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from toolspec.core.models.config import ResolverConfig


def load_cli_config(ctx: click.Context, start_dir: Path | None = None) -> ResolverConfig:
    """Build the ResolverConfig for a CLI invocation, exiting 1 on error."""
    from toolspec.core.config.loader import ConfigError, load_config

    try:
        return load_config(
            path=ctx.obj.get("config_path"),
            start_dir=start_dir,
            environ=os.environ,
            overrides=ctx.obj.get("overrides"),
        )
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


@click.group()
def config() -> None:
    """Resolver configuration commands."""


@config.command("show")
@click.option(
    "--project-dir",
    "-p",
    type=click.Path(file_okay=False),
    default=None,
    help="Start toolspec.yml search here (default: current directory).",
)
@click.pass_context
def show(ctx: click.Context, project_dir: str | None) -> None:
    """Print the effective resolver configuration as JSON."""
    cfg = load_cli_config(ctx, start_dir=Path(project_dir) if project_dir else None)
    data = cfg.model_dump(mode="json")
    data["resolved_host_path"] = cfg.resolved_host_path()
    data["package_roots"] = cfg.package_roots()
    click.echo(json.dumps(data, indent=2))
