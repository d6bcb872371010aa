"""
API package.

Versioned record routes live under ``v1``; the session routes in
``session`` are mounted at the application root.
"""
