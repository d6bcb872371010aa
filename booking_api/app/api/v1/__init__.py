"""
Version 1 of the API.

This subpackage bundles the services and booking endpoints, mounted
under ``/api/v1``.
"""
