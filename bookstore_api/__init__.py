"""
Top‑level package for the Bookstore API.

This file makes ``bookstore_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``bookstore_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
