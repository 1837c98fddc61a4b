"""
orca-installer — CLI entrypoint.

Usage:
    orca-install --help
    orca-install install                 # latest release into /usr/local/bin
    orca-install install -b ~/bin v1.2.3
    orca-install resolve latest
    python -m orca_installer platform
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import NoReturn

import click

from orca_installer import __version__
from orca_installer.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="orca-install")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help=(
        "Force INFO progress output even when ORCA_INSTALL_LOG_LEVEL is set "
        "(INFO is already the default)."
    ),
)
@click.option("--quiet", "-q", is_flag=True, help="Only print errors.")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    envvar="ORCA_INSTALL_CONFIG",
    default=None,
    help="Path to orca-install.yml (default: auto-detect, else built-in defaults).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """orca-installer — download, verify and install the orca-cli binary."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("ORCA_INSTALL_LOG_LEVEL", "INFO")

    setup_logging(
        level=level,
        log_file=os.environ.get("ORCA_INSTALL_LOG_FILE"),
        log_file_level=os.environ.get("ORCA_INSTALL_LOG_FILE_LEVEL"),
    )


def _fail(message: str, error_type: str | None = None) -> NoReturn:
    label = f"{error_type}: " if error_type else ""
    click.secho(f"❌ {label}{message}", fg="red", err=True)
    sys.exit(1)


@cli.command()
@click.argument("tag", required=False, default="")
@click.option(
    "--bin-dir",
    "-b",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="BINDIR",
    default=None,
    help="Installation directory (default: /usr/local/bin, or $BINDIR).",
)
@click.option("--trace", "-x", is_flag=True, help="Print each pipeline stage as it runs.")
@click.option("--no-sudo", is_flag=True, help="Never retry the final copy with sudo.")
@click.option("--os", "os_name", default=None, help="Override the detected OS (e.g. linux).")
@click.option("--arch", default=None, help="Override the detected architecture (e.g. arm64).")
@click.option(
    "--tmp-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="ORCA_INSTALL_TMPDIR",
    default=None,
    help="Parent directory for the scratch workspace (default: $TMPDIR).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    tag: str,
    bin_dir: Path | None,
    trace: bool,
    no_sudo: bool,
    os_name: str | None,
    arch: str | None,
    tmp_dir: Path | None,
    as_json: bool,
) -> None:
    """Install TAG (default: the latest release).

    TAG is a release tag such as v1.2.3, or 'latest'.
    """
    from orca_installer.core.use_cases.install import install_release

    result = install_release(
        config_path=ctx.obj.get("config_path"),
        requested_tag=tag,
        bin_dir=bin_dir,
        os_name=os_name,
        arch=arch,
        tmp_root=tmp_dir,
        escalate=not no_sudo,
        trace=trace,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        _fail(result.error or "install failed", result.error_type)

    if not ctx.obj.get("quiet"):
        click.secho(f"✅ Installed {result.installed_path}", fg="green", bold=True)


@cli.command()
@click.argument("tag", required=False, default="")
@click.option("--os", "os_name", default=None, help="Override the detected OS.")
@click.option("--arch", default=None, help="Override the detected architecture.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def resolve(
    ctx: click.Context,
    tag: str,
    os_name: str | None,
    arch: str | None,
    as_json: bool,
) -> None:
    """Resolve TAG to a concrete release and show its asset URLs."""
    from orca_installer.core.use_cases.install import install_release

    result = install_release(
        config_path=ctx.obj.get("config_path"),
        requested_tag=tag,
        os_name=os_name,
        arch=arch,
        dry_run=True,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok or result.plan is None:
        _fail(result.error or "resolution failed", result.error_type)

    plan = result.plan
    click.secho(f"🏷️  {plan.settings.owner_repo} {plan.release.tag}", fg="cyan", bold=True)
    click.echo(f"   Version:   {plan.release.version}")
    click.echo(f"   Platform:  {plan.platform.name}")
    click.echo(f"   Archive:   {plan.archive.url}")
    click.echo(f"   Checksums: {plan.checksums.url}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def platform(ctx: click.Context, as_json: bool) -> None:
    """Show the detected platform and whether releases exist for it."""
    from orca_installer.core.config.loader import ConfigError, load_settings
    from orca_installer.core.errors import UnsupportedPlatformError
    from orca_installer.core.services.release_install.detection.platform import (
        detect,
        normalize_arch,
        normalize_os,
    )

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        _fail(str(e), "ConfigError")

    import platform as _platform

    raw_os, raw_arch = _platform.system(), _platform.machine()
    data = {
        "raw": {"os": raw_os, "arch": raw_arch},
        "os": normalize_os(raw_os),
        "arch": normalize_arch(raw_arch),
        "supported": True,
        "supported_platforms": list(settings.supported_platforms),
    }
    error = None
    try:
        detect(raw_os, raw_arch, settings.supported_platforms)
    except UnsupportedPlatformError as e:
        data["supported"] = False
        error = str(e)
        data["error"] = error

    if as_json:
        click.echo(json.dumps(data, indent=2))
        sys.exit(0 if data["supported"] else 1)

    click.echo(f"   Platform: {data['os']}/{data['arch']} (raw: {raw_os}/{raw_arch})")
    if error:
        _fail(error, "UnsupportedPlatformError")
    click.secho("✅ Supported", fg="green")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def verify(file: Path, manifest: Path) -> None:
    """Verify FILE against its SHA-256 record in MANIFEST."""
    from orca_installer.core.errors import InstallerError
    from orca_installer.core.services.release_install.execution.verify import verify as _verify

    try:
        digest = _verify(file, manifest)
    except InstallerError as e:
        _fail(str(e), type(e).__name__)

    click.secho(f"✅ {file.name}: sha256 {digest}", fg="green")


# ── Register sub-command groups from orca_installer/ui/cli/ ──────

from orca_installer.ui.cli.config import config  # noqa: E402

cli.add_command(config)


if __name__ == "__main__":
    cli()
