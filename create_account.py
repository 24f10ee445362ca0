"""
Script for creating an organization and its first account.

For dev/test purposes; the registration endpoint applies rate limits and
input checks that this script skips.
"""

import click

from interface_core.auth.passwords import hash_password
from interface_core.factory import create_web_app
from interface_core.services import database
from interface_core.services.exceptions import AccountExists, \
    OrganizationExists


@click.command()
@click.option('--username', prompt='Username')
@click.option('--password', prompt='Password', hide_input=True)
@click.option('--company', prompt='Company name')
@click.option('--description', prompt='Company description', default='')
def create_account(username: str, password: str, company: str,
                   description: str = '') -> None:
    """Create an organization and an account in it."""
    app = create_web_app()
    with app.app_context():
        database.create_all()
        try:
            organization = database.create_organization(
                company.strip(), description or None
            )
            account = database.create_account(
                username.strip(),
                hash_password(password, app.config['BCRYPT_ROUNDS']),
                organization.organization_id
            )
        except (AccountExists, OrganizationExists) as e:
            raise click.ClickException(str(e)) from e
    click.echo(f'Created account {account.account_id} '
               f'in organization {organization.organization_id}')


if __name__ == '__main__':
    create_account()
