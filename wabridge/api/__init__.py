"""
HTTP API layer: routes, middleware and dependencies.
"""
