"""
CLI commands for policy inspection.

Thin wrappers over ``lattice.core.services.policy``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def policy() -> None:
    """Policy — show the effective ruleset for a config."""


@policy.command("show")
@click.option(
    "--preset",
    type=click.Choice(["startup", "pro", "enterprise"]),
    default=None,
    help="Override the config's strictness preset.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, preset: str | None, as_json: bool) -> None:
    """Show the resolved policy."""
    from lattice.core.config.loader import ConfigError, load_config
    from lattice.core.services.policy import resolve_policy

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if preset:
        config = config.model_copy(update={"strictness_preset": preset})

    resolved = resolve_policy(config)

    if as_json:
        click.echo(json.dumps(resolved.model_dump(mode="json"), indent=2))
        return

    flag = {True: "on", False: "off"}
    click.secho(
        f"\n🛡️  Policy {resolved.version} — {config.strictness_preset}",
        fg="cyan",
        bold=True,
    )
    click.echo(f"   Version posture: {resolved.version_posture}")
    click.echo(f"   Required checks: {', '.join(resolved.required_checks) or 'none'}")
    click.echo(
        "   Boundary validation: "
        f"{flag[resolved.runtime_safety.boundary_validation_required]}"
    )
    click.echo(f"   Code owners: {flag[resolved.process.codeowners_required]}")
    click.echo(f"   Audit trail: {flag[resolved.process.audit_trail_required]}")
    click.echo()
