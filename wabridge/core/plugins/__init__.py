"""
Gateway plugins registered with BridgeBuilder.
"""

from .bridge_core_plugin import BridgeCorePlugin
from .message_log_plugin import MessageLogPlugin

__all__ = ["BridgeCorePlugin", "MessageLogPlugin"]
