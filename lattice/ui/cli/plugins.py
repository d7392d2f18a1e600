"""
CLI commands for plugin inspection.
"""

from __future__ import annotations

import json

import click


@click.group()
def plugins() -> None:
    """Plugins — list registered generation plugins."""


@plugins.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_plugins(as_json: bool) -> None:
    """List built-in plugins with phase and dependencies."""
    from lattice.plugins import default_registry

    registry = default_registry()
    rows = []
    for plugin_id in registry.list_plugins():
        plugin = registry.get(plugin_id)
        assert plugin is not None
        rows.append({
            "id": plugin.id,
            "version": plugin.version,
            "phase": plugin.phase,
            "conflict_policy": plugin.conflict_policy,
            "dependencies": sorted(plugin.dependencies),
        })

    if as_json:
        click.echo(json.dumps({"plugins": rows}, indent=2))
        return

    click.secho(f"\n🧩 Plugins: {len(rows)}", fg="cyan", bold=True)
    for row in rows:
        deps = f"  ← {', '.join(row['dependencies'])}" if row["dependencies"] else ""
        click.echo(f"   • {row['id']} v{row['version']} [{row['phase']}, {row['conflict_policy']}]{deps}")
    click.echo()
