"""
Command-line interface for running the gateway.
"""
