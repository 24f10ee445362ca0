"""
Interface core API.

The core API is a Flask application that lets a company register an account,
log in with a username and password, and upload images and videos to a cloud
storage bucket. Media belongs to the company (the organization), not to the
individual account that uploaded it.

Context
-------
A registration creates an organization and its first account in one call.
Login and registration both issue a signed, stateless session token that is
valid for 24 hours; the login route also sets it as an HTTP-only cookie.
Clients present the token in the ``Authorization`` header (``Bearer <token>``)
to the upload routes.

Uploaded bytes are streamed to a Google Cloud Storage bucket under a generated
name and made publicly readable. A metadata record with the public URL is
written to the database for each stored object.
"""
