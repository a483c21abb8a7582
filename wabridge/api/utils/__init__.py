"""
API utility functions and helpers.
"""

from .error_helpers import bulk_status_code, error_response

__all__ = ["bulk_status_code", "error_response"]
