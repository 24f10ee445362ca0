"""Integrations with the database and the object storage bucket."""
