"""
Service layer.

``validation`` holds the pure request checks; the ``*_service``
modules wrap the store client for each table.  Handlers in
``api/endpoints`` compose the two.
"""
