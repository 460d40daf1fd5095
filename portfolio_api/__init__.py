"""
Top-level package for the Portfolio API.

All functionality lives in submodules under ``app``; the ASGI
application is ``portfolio_api.app.main:app``.
"""

__all__ = []
