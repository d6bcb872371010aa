"""
Top-level package for the Booking Services API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``booking_api.app.main:app``.
"""

__all__ = []
