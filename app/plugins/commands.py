"""CLI commands for plugin management"""
import click
import traceback
from flask import current_app
from flask.cli import with_appcontext
from app.plugins.plugin_manager import get_plugin_manager
from app.plugins.plugin import Plugin

@click.group('plugins')
def plugins_cli():
    """Plugin management commands."""
    pass

@plugins_cli.command('discover')
@with_appcontext
def discover_plugins():
    """Discover and register available plugins."""
    manager = get_plugin_manager()
    plugins = manager.discover_plugins(current_app.config['PLUGINS_DIR'])
    click.echo(f"Discovered {len(plugins)} plugins.")
    for plugin in plugins:
        click.echo(f" - {plugin.get('name')} ({plugin.get('slug')})")

@plugins_cli.command('list')
@with_appcontext
def list_plugins():
    """List all registered plugins."""
    plugins = Plugin.query.order_by(Plugin.id).all()
    click.echo(f"Found {len(plugins)} registered plugins:")
    for plugin in plugins:
        click.echo(f" - {plugin.name} ({plugin.slug}): {plugin.status}")

@plugins_cli.command('activate')
@click.argument('slug')
@with_appcontext
def activate_plugin(slug):
    """Activate a plugin."""
    manager = get_plugin_manager()
    if manager.activate_plugin(slug):
        click.echo(f"Plugin '{slug}' activated successfully.")
    else:
        click.echo(f"Failed to activate plugin '{slug}'.")

@plugins_cli.command('deactivate')
@click.argument('slug')
@with_appcontext
def deactivate_plugin(slug):
    """Deactivate a plugin."""
    manager = get_plugin_manager()
    if manager.deactivate_plugin(slug):
        click.echo(f"Plugin '{slug}' deactivated successfully.")
    else:
        click.echo(f"Failed to deactivate plugin '{slug}'.")

@plugins_cli.command('debug-plugin')
@click.argument('slug')
@with_appcontext
def debug_plugin(slug):
    """Debug a plugin's configuration and loading."""
    plugin = Plugin.query.filter_by(slug=slug).first()
    if not plugin:
        click.echo(f"Plugin '{slug}' not found.")
        return

    click.echo("Plugin Details:")
    click.echo(f"  ID: {plugin.id}")
    click.echo(f"  Name: {plugin.name}")
    click.echo(f"  Slug: {plugin.slug}")
    click.echo(f"  Status: {plugin.status}")
    click.echo(f"  Entry Point: {plugin.entry_point}")
    click.echo(f"  Module Path: {plugin.module_path}")
    click.echo(f"  Module Attr: {plugin.module_attr}")
    click.echo(f"  Config: {plugin.effective_config()}")

    # Test loading the plugin
    click.echo("\nAttempting to load plugin...")
    try:
        plugin_class = plugin.load()
        if plugin_class:
            click.echo("  SUCCESS: Plugin loaded successfully.")
            click.echo(f"  Plugin Class: {plugin_class}")
        else:
            click.echo("  FAILED: Plugin.load() returned None.")
    except Exception as e:
        click.echo(f"  ERROR: {str(e)}")
        click.echo(traceback.format_exc())

def register_commands(app):
    """Register plugin management commands with Flask."""
    app.cli.add_command(plugins_cli)
