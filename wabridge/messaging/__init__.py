"""
Messaging layer: bulk dispatch, content builders and the bridge client.
"""

from .bulk_dispatcher import BulkDispatcher

__all__ = ["BulkDispatcher"]
