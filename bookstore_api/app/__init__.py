"""
Application package initializer.

The application is organised into small layers: ``core`` (settings,
logging, errors and the store client), ``schemas`` (wire models),
``services`` (validation and persistence) and ``api`` (HTTP handlers).
Each resource (books, customers) has its own schema, service and
endpoint module.
"""

from .main import app  # noqa: F401
