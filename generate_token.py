"""
Helper script for generating a session token.

Be sure that you are using the same secret when running this script as when
you run the app. Set ``JWT_SECRET=somesecret`` in your environment to ensure
that the same secret is always used.

.. code-block:: bash

   $ JWT_SECRET=foosecret python generate_token.py
   Account ID: 4
   Session duration in seconds [86400]:

   eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...

Start the dev server with:

.. code-block:: bash

   $ JWT_SECRET=foosecret FLASK_APP=app.py FLASK_DEBUG=1 flask run

Use the token in requests to the upload endpoints, in the header
``Authorization: Bearer <token>``.
"""

import os

import click

from interface_core.auth.tokens import SessionIssuer


@click.command()
@click.option('--account_id', prompt='Account ID')
@click.option('--duration', prompt='Session duration in seconds',
              default=86400)
def generate_token(account_id: str, duration: int) -> None:
    """Generate a session token for an account."""
    secret = os.environ.get('JWT_SECRET')
    if not secret:
        raise click.ClickException('Set JWT_SECRET in the environment')
    issuer = SessionIssuer(secret, duration=duration)
    click.echo(issuer.issue(account_id))


if __name__ == '__main__':
    generate_token()
