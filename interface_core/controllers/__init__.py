"""
Request controllers for the core API.

Controllers take plain request data, do the work, and return a tuple of
response data, HTTP status code, and extra headers. Errors are raised as
exceptions from :mod:`interface_core.exceptions`.
"""
