"""
Maintenance commands for the admin console.

Run with ``flask --app app <command>``. These replace any HTTP-facing
maintenance hooks: changing roles requires shell access to the server.
"""

import click
from flask import current_app
from flask.cli import with_appcontext

from storefront.accounts import get_account_service
from storefront.errors import DuplicateUsername, NotFound


@click.command('seed-admin')
@with_appcontext
def seed_admin_command():
    """Create the configured super admin if no super admin exists."""
    account = get_account_service().ensure_super_admin(
        current_app.config.get('SUPER_ADMIN_USERNAME'),
        current_app.config.get('SUPER_ADMIN_PASSWORD'),
    )
    if account is None:
        click.echo('Super admin already present, nothing to do.')
    else:
        click.echo(f'Super admin ready: {account.username}')


@click.command('create-admin')
@with_appcontext
@click.argument('username')
@click.password_option()
@click.option('--super', 'is_super_admin', is_flag=True, help='Grant super admin rights.')
def create_admin_command(username, password, is_super_admin):
    """Create an admin account."""
    try:
        get_account_service().create_account(username, password, is_super_admin)
    except DuplicateUsername as e:
        raise click.ClickException(e.message)
    click.echo(f'Created admin {username}' + (' (super admin)' if is_super_admin else ''))


@click.command('promote-admin')
@with_appcontext
@click.argument('username')
def promote_admin_command(username):
    """Grant super admin rights to an existing account."""
    try:
        get_account_service().promote(username)
    except NotFound as e:
        raise click.ClickException(e.message)
    click.echo(f'{username} is now a super admin')


def register_commands(app):
    app.cli.add_command(seed_admin_command)
    app.cli.add_command(create_admin_command)
    app.cli.add_command(promote_admin_command)
