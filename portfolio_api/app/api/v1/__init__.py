"""
Version 1 of the API.

This subpackage bundles the account and content endpoints served under
``/api/v1``.  Breaking changes belong in a new version subpackage
(e.g. ``v2``) so existing clients keep working.
"""
