"""
Messaging client backed by the Baileys bridge sidecar.
"""

from .bridge_client import BaileysBridgeClient, BridgeUrlBuilder

__all__ = ["BaileysBridgeClient", "BridgeUrlBuilder"]
