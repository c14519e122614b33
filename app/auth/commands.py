"""CLI commands for user management"""
import click
from flask.cli import with_appcontext
from app.auth.user import User

@click.group('users')
def users_cli():
    """User management commands."""
    pass

@users_cli.command('create')
@click.argument('username')
@click.option('--password', default=None, help='Optional password for the user.')
@click.option('--display-name', default=None, help='Name shown in the player list.')
@click.option('--gamemaster', is_flag=True, help='Grant gamemaster rights.')
@with_appcontext
def create_user(username, password, display_name, gamemaster):
    """Create a user."""
    if User.query.filter_by(username=username).first():
        click.echo(f"User '{username}' already exists.")
        return

    user = User.create_user(
        username=username,
        password=password,
        display_name=display_name,
        is_gamemaster=gamemaster
    )
    click.echo(f"User '{user.username}' created with id {user.id}.")

@users_cli.command('list')
@with_appcontext
def list_users():
    """List all users."""
    users = User.query.order_by(User.id).all()
    click.echo(f"Found {len(users)} users:")
    for user in users:
        role = 'gamemaster' if user.is_gamemaster else 'player'
        click.echo(f" - {user.id}: {user.name} ({role})")

def register_commands(app):
    """Register user management commands with Flask."""
    app.cli.add_command(users_cli)
