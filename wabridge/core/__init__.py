"""
Core gateway infrastructure: configuration, logging, events and the app factory.
"""
