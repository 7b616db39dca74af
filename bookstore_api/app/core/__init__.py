"""
Cross‑cutting pieces: configuration, logging, error types and the
store client.
"""
