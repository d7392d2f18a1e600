"""
Lattice — CLI entrypoint.

Usage:
    python -m lattice.main --help
    python -m lattice.main generate --output ./lattice-pack
    python -m lattice.main apply --pack ./lattice-pack --target .
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from lattice import __version__
from lattice.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    level_from_flags,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="lattice")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to lattice.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Lattice — deterministic project scaffolding."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
    )


@cli.command()
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False),
    default="./lattice-pack",
    show_default=True,
    help="Directory the pack is written to.",
)
@click.option(
    "--existing",
    "existing_dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Seed the render with files from an existing repository.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    output_dir: str,
    existing_dir: str | None,
    as_json: bool,
) -> None:
    """Render a pack of files and its manifest."""
    from lattice.core.use_cases.generate import run_generate
    from lattice.plugins import default_registry

    result = run_generate(
        registry=default_registry(),
        output_dir=Path(output_dir),
        config_path=ctx.obj.get("config_path"),
        existing_dir=Path(existing_dir) if existing_dir else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.render is not None
    assert result.config is not None
    manifest = result.render.manifest

    if not ctx.obj.get("quiet"):
        click.secho(
            f"\n📦 {result.config.project_type} ({result.config.strictness_preset})",
            fg="cyan",
            bold=True,
        )
        click.echo(f"   Output: {result.output_dir}")
        click.echo(f"   Config hash: {manifest.config_hash[:12]}")
        click.echo()
        if ctx.obj.get("verbose"):
            for entry in manifest.files:
                click.echo(f"     • {entry.path}  {entry.sha256[:12]}")
            click.echo()

    click.secho(f"   ✓ Generated {result.file_count} files", fg="green")
    click.echo(f"   Manifest written to {result.manifest_path}")
    click.echo()


@cli.command()
@click.option(
    "--pack",
    "pack_dir",
    type=click.Path(file_okay=False),
    default="./lattice-pack",
    show_default=True,
    help="Pack directory to apply.",
)
@click.option(
    "--target",
    "target_dir",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory to copy files into.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def apply(pack_dir: str, target_dir: str, as_json: bool) -> None:
    """Copy a pack into a directory (additive only, never overwrites)."""
    from lattice.core.use_cases.generate import run_apply

    result = run_apply(Path(pack_dir), Path(target_dir))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None

    click.secho(f"\n📥 Applied pack to {report.target}", fg="cyan", bold=True)
    click.secho(f"   ✓ Applied {len(report.added)} files", fg="green")

    if report.conflicts:
        click.echo()
        click.secho(
            f"   ⚠️  Skipped {len(report.conflicts)} conflicting files (already exist):",
            fg="yellow",
        )
        for path in report.conflicts:
            click.echo(f"     • {path}")

    click.echo()


@cli.command()
@click.option(
    "--pack",
    "pack_dir",
    type=click.Path(file_okay=False),
    default="./lattice-pack",
    show_default=True,
    help="Pack directory to verify.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def verify(pack_dir: str, as_json: bool) -> None:
    """Check a pack's files against its manifest hashes."""
    from lattice.core.use_cases.generate import run_verify

    result = run_verify(Path(pack_dir))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if result.ok:
        click.secho("✅ Pack matches its manifest", fg="green", bold=True)
        return

    click.secho("❌ Pack does not match its manifest:", fg="red", bold=True)
    for problem in result.problems:
        click.echo(f"   • {problem}")
    sys.exit(1)


@cli.group()
def config() -> None:
    """Generation configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate lattice.yml configuration."""
    from lattice.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Project type: {result.config.project_type}")
        click.echo(f"   Preset: {result.config.strictness_preset}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
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

    click.echo()


# ── Register sub-command groups from lattice/ui/cli/ ───────────────

from lattice.ui.cli.plugins import plugins  # noqa: E402
from lattice.ui.cli.policy import policy  # noqa: E402

cli.add_command(plugins)
cli.add_command(policy)


if __name__ == "__main__":
    cli()
