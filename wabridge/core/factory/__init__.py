"""
Application factory: BridgeBuilder and the BridgePlugin protocol.
"""

from .bridge_builder import BridgeBuilder
from .plugin import BridgePlugin

__all__ = ["BridgeBuilder", "BridgePlugin"]
