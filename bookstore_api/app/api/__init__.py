"""
API package containing the HTTP routes.

``router.py`` exposes a top‑level ``router`` which includes the
resource routers defined in ``endpoints``.
"""
