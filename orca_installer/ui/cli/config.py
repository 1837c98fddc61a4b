"""
CLI commands for installer settings.

Thin wrappers over ``orca_installer.core.use_cases.config_check``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def config() -> None:
    """Installer settings commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate orca-install.yml settings."""
    from orca_installer.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.settings is not None  # guaranteed when valid
        settings = result.settings
        click.secho("✅ Settings are valid", fg="green", bold=True)
        click.echo(f"   Project:    {settings.project_name} ({settings.owner_repo})")
        click.echo(f"   Binary:     {settings.effective_binary_name}")
        click.echo(f"   Install to: {settings.default_bin_dir}")
        click.echo(f"   Platforms:  {', '.join(settings.supported_platforms)}")
    else:
        click.secho("❌ Settings errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)
